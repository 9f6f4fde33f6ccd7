"""Pooled or per-sex regression fits selected by the dimorphism test."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

import pandas as pd

from lwr_tlbx.config import DEFAULT_CONFIG, AnalysisConfig
from lwr_tlbx.data.morphometry_columns import MorphometryColumn as Col

from .cleaning import CleaningResult
from .dimorphism import DimorphismResult
from .ols_helper import RegressionResult, fit_relationship


logger = logging.getLogger(__name__)


class GroupedResult(Mapping[int, RegressionResult]):
    """Per-sex regression results keyed by sex code (split path only)."""

    def __init__(self, results: Mapping[int, RegressionResult]) -> None:
        self._results = dict(sorted(results.items()))

    def __getitem__(self, sex: int) -> RegressionResult:
        return self._results[sex]

    def __iter__(self) -> Iterator[int]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return f"GroupedResult(sexes={list(self._results)})"


@dataclass(frozen=True)
class ModelFit:
    """Output of the fitting stage; exactly one of ``pooled``/``grouped`` is set."""

    pooled: RegressionResult | None = None
    grouped: GroupedResult | None = None

    @property
    def results(self) -> list[RegressionResult]:
        """All fitted scopes in export order."""
        if self.pooled is not None:
            return [self.pooled]
        return list(self.grouped.values()) if self.grouped is not None else []


def fit_pooled(cleaning: CleaningResult, config: AnalysisConfig = DEFAULT_CONFIG) -> RegressionResult:
    """Fit one regression on the outlier-filtered frame that still holds undefined-sex fish."""
    result = fit_relationship(
        cleaning.pooled_df,
        cleaning.kind,
        scope="pooled",
        alpha=config.alpha,
        reference_slope=config.reference_slope,
    )
    logger.info("Pooled fit: n=%d, R2=%.4f", result.n_obs, result.r2)
    return result


def fit_by_sex(cleaning: CleaningResult, config: AnalysisConfig = DEFAULT_CONFIG) -> GroupedResult:
    """Fit one regression per sex on the sex-filtered frame; empty partitions are skipped."""
    results: dict[int, RegressionResult] = {}
    for sex, part in _partitions(cleaning.sexed_df):
        if part.empty:
            continue
        results[sex] = fit_relationship(
            part,
            cleaning.kind,
            scope=str(sex),
            alpha=config.alpha,
            reference_slope=config.reference_slope,
        )
        logger.info("Sex %d fit: n=%d, R2=%.4f", sex, results[sex].n_obs, results[sex].r2)
    return GroupedResult(results)


def _partitions(df: pd.DataFrame) -> Iterator[tuple[int, pd.DataFrame]]:
    for sex, part in df.groupby(Col.SEX, sort=True):
        yield int(sex), part


def fit_models(
    cleaning: CleaningResult,
    dimorphism: DimorphismResult,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> ModelFit:
    """Take the pooled path when sexes are homogeneous, the split path otherwise."""
    if dimorphism.is_dimorphic:
        logger.info("Sexual dimorphism detected; fitting sexes separately")
        return ModelFit(grouped=fit_by_sex(cleaning, config))
    logger.info("No sexual dimorphism detected; fitting pooled model")
    return ModelFit(pooled=fit_pooled(cleaning, config))
