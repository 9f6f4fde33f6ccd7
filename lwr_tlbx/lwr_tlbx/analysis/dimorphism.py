"""ANCOVA test for sex differences in the fitted relationship."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, Self

import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from statsmodels.stats.anova import anova_lm

from lwr_tlbx.data.views import DatasetView

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)

_MIN_SEX_LEVELS = 2


@dataclass(frozen=True)
class DimorphismResult:
    r"""Outcome of the ANCOVA ``response ~ predictor * C(sex)``.

    Attributes:
        anova_table: Sequential (type I) ANOVA table; empty when not estimable.
        interaction_pvalue: p-value of the predictor:sex term (slope heterogeneity).
        sex_pvalue: p-value of the sex main effect (intercept heterogeneity).
        alpha: Significance level of the decision rule.
        sex_levels: Sex codes present in the tested frame.
        model: Fitted statsmodels result, ``None`` when fewer than two sexes remain.
    """

    anova_table: pd.DataFrame
    interaction_pvalue: float
    sex_pvalue: float
    alpha: float
    sex_levels: tuple[int, ...]
    model: sm.regression.linear_model.RegressionResultsWrapper | None = None

    @property
    def is_dimorphic(self) -> bool:
        """True if either p-value is below ``alpha`` (NaN never counts as significant)."""
        return self.interaction_pvalue < self.alpha or self.sex_pvalue < self.alpha

    @property
    def path(self) -> Literal["pooled", "split"]:
        return "split" if self.is_dimorphic else "pooled"

    def __repr__(self) -> str:
        return (
            "DimorphismResult("
            f"interaction_p={self.interaction_pvalue:.4g}, "
            f"sex_p={self.sex_pvalue:.4g}, "
            f"alpha={self.alpha}, path={self.path})"
        )


def _term_pvalue(table: pd.DataFrame, *factors: str) -> float:
    """Look up the ``PR(>F)`` of the term made of exactly ``factors`` (order-insensitive)."""
    wanted = set(factors)
    for term in table.index:
        if set(str(term).split(":")) == wanted:
            return float(table.loc[term, "PR(>F)"])
    raise KeyError(f"Term {':'.join(factors)!r} not found in ANOVA table {table.index.tolist()}")


class DimorphismTester(BaseAnalyser):
    """Test homogeneity of regression lines across sexes.

    Fits ``response ~ predictor * C(sex)`` by OLS on the sex-filtered frame and
    reads the interaction and sex main-effect p-values from the sequential ANOVA
    table. Sexes are homogeneous when both p-values are ``>= alpha`` (no
    multiple-comparison correction).

    Example:
        >>> tester = DimorphismTester(dataset.view(kind, cleaning.sexed_df))
        >>> tester.fit().result().path
        'pooled'
    """

    def __init__(self, view: DatasetView, alpha: float = 0.05) -> None:
        self._view = view
        self.alpha = alpha
        self._result: DimorphismResult | None = None

    @property
    def formula(self) -> str:
        kind = self._view.kind
        return f"{kind.response_term} ~ {kind.predictor_term} * C({self._view.sex_col})"

    def fit(self) -> Self:
        """Fit the ANCOVA model and extract the two p-values."""
        sex_col = self._view.sex_col
        levels = tuple(sorted(int(v) for v in self._view.df[sex_col].unique()))

        if len(levels) < _MIN_SEX_LEVELS:
            logger.info("ANCOVA not estimable with sex levels %s; treating sexes as homogeneous", levels)
            self._result = DimorphismResult(
                anova_table=pd.DataFrame(),
                interaction_pvalue=math.nan,
                sex_pvalue=math.nan,
                alpha=self.alpha,
                sex_levels=levels,
            )
            return self

        model = smf.ols(self.formula, data=self._view.df).fit()
        table = anova_lm(model)
        sex_term = f"C({sex_col})"
        self._result = DimorphismResult(
            anova_table=table,
            interaction_pvalue=_term_pvalue(table, self._view.kind.predictor_term, sex_term),
            sex_pvalue=_term_pvalue(table, sex_term),
            alpha=self.alpha,
            sex_levels=levels,
            model=model,
        )
        logger.info("%r", self._result)
        return self

    def result(self) -> DimorphismResult:
        """Return the ANCOVA outcome.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        if self._result is None:
            raise ValueError("Must call fit() before result()")
        return self._result
