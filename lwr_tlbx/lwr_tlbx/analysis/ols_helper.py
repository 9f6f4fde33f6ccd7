r"""OLS fitting helpers for the length-weight and length-length relationships.

A relationship is fitted by ordinary least squares on the model scale:

- LWR: :math:`\log_{10} W = \log_{10} a + b \log_{10} SL`; the intercept is
  back-transformed to :math:`a = 10^{\log_{10} a}` and the slope is tested
  against isometric growth (:math:`b = 3`).
- LLR: :math:`TL = a + b \cdot SL`.

Every fit reports estimates, standard errors, :math:`(1-\alpha)` confidence
intervals, the unadjusted :math:`R^2`, the sample size and the observed range
of both measurements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf
from patsy import build_design_matrices
from scipy import stats
from sklearn.metrics import mean_absolute_error, mean_squared_error

from lwr_tlbx.data.relationship import RelationshipKind


if TYPE_CHECKING:
    from matplotlib.figure import Figure


_INTERCEPT_COLS = ("Intercept", "const")
PARAMETER_COLUMNS = ["estimate", "std_error", "ci_lower", "ci_upper"]


@dataclass(frozen=True)
class MetricsResult:
    r"""Fit metrics of a relationship model (model scale).

    - :math:`R^2 = 1 - \frac{SS_{res}}{SS_{tot}}` (unadjusted)
    - :math:`\text{RMSE} = \sqrt{\frac{1}{n}\sum_i (y_i - \hat{y}_i)^2}`
    - :math:`\text{MAE} = \frac{1}{n}\sum_i |y_i - \hat{y}_i|`
    """

    r2: float
    """Coefficient of determination (unadjusted)."""
    adj_r2: float
    rmse: float
    """Root mean squared error in model units (log10 units for LWR)."""
    mae: float
    aic: float
    bic: float
    n_obs: int
    df_resid: float
    """Residual degrees of freedom of the fit."""

    def __repr__(self) -> str:
        return (
            "MetricsResult("
            f"r2={self.r2:.4f}, adj_r2={self.adj_r2:.4f}, rmse={self.rmse:.4g}, "
            f"mae={self.mae:.4g}, aic={self.aic:.2f}, bic={self.bic:.2f}, n={self.n_obs})"
        )


@dataclass(frozen=True)
class IsometryTestResult:
    r"""Two-sided t-test of :math:`H_0: b = b_0` for the LWR slope.

    :math:`t = (\hat{b} - b_0) / SE(\hat{b})` with ``df_resid`` degrees of
    freedom; :math:`p = 2\,(1 - F_t(|t|))`.
    """

    reference: float
    estimate: float
    std_error: float
    t_statistic: float
    df: float
    p_value: float

    def rejects(self, alpha: float = 0.05) -> bool:
        """True if isometric growth is rejected at level ``alpha``."""
        return self.p_value < alpha

    @property
    def growth_type(self) -> str:
        """``isometric`` unless rejected at 5 %, then ``positive/negative allometric``."""
        if not self.rejects():
            return "isometric"
        return "positive allometric" if self.estimate > self.reference else "negative allometric"


@dataclass(frozen=True)
class RegressionResult:
    """Packaged OLS fit of one relationship for one scope (pooled or one sex).

    Encapsulates the fitted statsmodels result, the model frame, the reporting
    tables and, for LWR, the isometry test.
    """

    model: sm.regression.linear_model.RegressionResultsWrapper
    kind: RelationshipKind
    scope: str
    data: pd.DataFrame
    parameters: pd.DataFrame
    metrics: MetricsResult
    ranges: pd.DataFrame
    alpha: float = 0.05
    isometry: IsometryTestResult | None = None

    @property
    def r2(self) -> float:
        """Coefficient of determination :math:`R^2` of the fitted model."""
        return self.metrics.r2

    @property
    def n_obs(self) -> int:
        return self.metrics.n_obs

    @property
    def intercept(self) -> float:
        """Model-scale intercept (``log10(a)`` for LWR, ``a`` for LLR)."""
        return float(self.model.params[_intercept_name(self.model)])

    @property
    def slope(self) -> float:
        """Slope ``b`` of the relationship."""
        return float(self.model.params[self.kind.predictor_term])

    @property
    def a(self) -> float:
        """Intercept on the measurement scale (``10 ** log10(a)`` for LWR)."""
        return 10.0**self.intercept if self.kind.log_scale else self.intercept

    def predict_band(self, predictor: np.ndarray | pd.Series) -> pd.DataFrame:
        """Fitted mean and its confidence band on the measurement scale.

        Args:
            predictor: Raw predictor values (standard length).

        Returns:
            DataFrame with columns ``predictor``, ``fit``, ``ci_lower``, ``ci_upper``.
        """
        grid = np.asarray(predictor, dtype=float)
        new_data = pd.DataFrame({self.kind.predictor_term: self.kind.to_model_scale(grid)})
        exog = design_matrix_for_data(self.model, new_data)
        frame = self.model.get_prediction(exog, transform=False).summary_frame(alpha=self.alpha)
        return pd.DataFrame(
            {
                "predictor": grid,
                "fit": self.kind.to_response_scale(frame["mean"].to_numpy()),
                "ci_lower": self.kind.to_response_scale(frame["mean_ci_lower"].to_numpy()),
                "ci_upper": self.kind.to_response_scale(frame["mean_ci_upper"].to_numpy()),
            },
        )

    # ------------------------------------------------------------------ plotting shortcuts
    def plot(self, **kwargs: object) -> Figure:
        """Scatter of the observations with fitted curve and confidence band."""
        from lwr_tlbx.plotting.relationship_plots import plot_relationship  # noqa: PLC0415

        return plot_relationship(self, **kwargs)

    def plot_residual_diags(self, **kwargs: object) -> Figure:
        """Residuals vs fitted and normal Q-Q plot of the fit."""
        from lwr_tlbx.plotting.regression_plots import plot_residual_diags  # noqa: PLC0415

        return plot_residual_diags(self, **kwargs)


def _intercept_name(model: sm.regression.linear_model.RegressionResultsWrapper) -> str:
    for name in _INTERCEPT_COLS:
        if name in model.params.index:
            return name
    raise KeyError(f"No intercept in model parameters {model.params.index.tolist()}")


def fit_relationship(
    df: pd.DataFrame,
    kind: RelationshipKind,
    *,
    scope: str = "pooled",
    alpha: float = 0.05,
    reference_slope: float = 3.0,
) -> RegressionResult:
    """Fit one relationship by OLS and package all reporting quantities.

    This uses ``statsmodels.formula.api.ols`` with ``"{response} ~ {predictor}"``
    on the model frame (log10 terms for LWR). Degenerate inputs are not
    validated; statsmodels' NaN results propagate.

    Args:
        df: Frame with the raw measurement columns required by ``kind``.
        kind: Relationship to fit.
        scope: Label of the subset (``"pooled"`` or the sex code).
        alpha: Level for the ``1 - alpha`` confidence intervals.
        reference_slope: Slope of isometric growth tested for LWR.
    """
    frame = kind.model_frame(df)
    model = smf.ols(f"{kind.response_term} ~ {kind.predictor_term}", data=frame).fit()
    return RegressionResult(
        model=model,
        kind=kind,
        scope=str(scope),
        data=frame,
        parameters=parameter_table(model, kind, alpha=alpha),
        metrics=compute_metrics(model),
        ranges=observed_ranges(frame, kind),
        alpha=alpha,
        isometry=slope_test(model, kind.predictor_term, reference=reference_slope) if kind.log_scale else None,
    )


def parameter_table(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    kind: RelationshipKind,
    *,
    alpha: float = 0.05,
) -> pd.DataFrame:
    """Estimates, standard errors and confidence bounds indexed by parameter.

    LLR rows: ``a`` (intercept) and ``b`` (slope). LWR rows: ``log10(a)``, the
    back-transformed ``a`` (estimate and bounds raised to the power of ten; the
    standard error is only defined on the log scale and left empty) and ``b``.
    """
    ci = model.conf_int(alpha=alpha)
    intercept = _intercept_name(model)
    slope = kind.predictor_term

    def row(term: str) -> list[float]:
        return [float(model.params[term]), float(model.bse[term]), float(ci.loc[term, 0]), float(ci.loc[term, 1])]

    rows: dict[str, list[float]] = {}
    if kind.log_scale:
        log_a = row(intercept)
        rows["log10(a)"] = log_a
        rows["a"] = [10.0 ** log_a[0], np.nan, 10.0 ** log_a[2], 10.0 ** log_a[3]]
    else:
        rows["a"] = row(intercept)
    rows["b"] = row(slope)

    table = pd.DataFrame.from_dict(rows, orient="index", columns=PARAMETER_COLUMNS)
    table.index.name = "parameter"
    return table


def slope_test(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    term: str,
    *,
    reference: float = 3.0,
) -> IsometryTestResult:
    r"""Two-sided t-test of a single coefficient against ``reference``.

    :math:`t = (\hat{b} - b_0)/SE(\hat{b})` and
    :math:`p = 2\,(1 - F_{t,\,df_{resid}}(|t|))`.
    """
    estimate = float(model.params[term])
    std_error = float(model.bse[term])
    df = float(model.df_resid)
    t_stat = (estimate - reference) / std_error
    p_value = 2 * (1 - stats.t.cdf(abs(t_stat), df))
    return IsometryTestResult(
        reference=reference,
        estimate=estimate,
        std_error=std_error,
        t_statistic=float(t_stat),
        df=df,
        p_value=float(p_value),
    )


def observed_ranges(df: pd.DataFrame, kind: RelationshipKind) -> pd.DataFrame:
    """Observed min/max of the raw response and predictor columns."""
    cols = [kind.response_col, kind.predictor_col]
    ranges = df[cols].agg(["min", "max"]).T
    ranges.index.name = "measurement"
    return ranges


def compute_metrics(model: sm.regression.linear_model.RegressionResultsWrapper) -> MetricsResult:
    """Compute in-sample fit metrics on the model scale."""
    y_true = np.asarray(model.model.endog, dtype=float)
    y_pred = np.asarray(model.fittedvalues, dtype=float)
    rmse = float(np.sqrt(mean_squared_error(y_true, y_pred)))
    return MetricsResult(
        r2=float(model.rsquared),
        adj_r2=float(model.rsquared_adj),
        rmse=rmse,
        mae=float(mean_absolute_error(y_true, y_pred)),
        aic=float(model.aic),
        bic=float(model.bic),
        n_obs=int(model.nobs),
        df_resid=float(model.df_resid),
    )


def design_matrix_for_data(
    model: sm.regression.linear_model.RegressionResultsWrapper,
    df: pd.DataFrame,
) -> pd.DataFrame:
    """Build a Patsy design matrix for new data using the fitted model's ``design_info``."""
    design_info = model.model.data.design_info
    matrices = build_design_matrices([design_info], df, return_type="dataframe")
    return matrices[0]
