"""Residual-based outlier detection following the analyzer pattern."""

from dataclasses import dataclass
from typing import Self

import pandas as pd
import statsmodels.api as sm

from lwr_tlbx.data.views import DatasetView

from .base_analyser import BaseAnalyser


@dataclass(frozen=True)
class OutlierDetectionResult:
    """Container for residual outlier detection results.

    Attributes:
        standardized_residuals: Residuals of the preliminary fit divided by their sample standard deviation.
        outlier_mask: Boolean Series, True where ``|standardized residual| >= threshold``.
        fitted: Fitted values of the preliminary regression (model scale).
        threshold: Cut-off applied to the absolute standardized residuals.
        pretty_names: Mapping of column names to pretty display names.
    """

    standardized_residuals: pd.Series
    outlier_mask: pd.Series
    fitted: pd.Series
    threshold: float
    pretty_names: dict[str, str] | None = None

    @property
    def n_outliers(self) -> int:
        return int(self.outlier_mask.sum())

    @property
    def outlier_index(self) -> pd.Index:
        """Row labels flagged as outliers."""
        return self.outlier_mask.index[self.outlier_mask]

    def filter(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return a copy of ``df`` without the flagged rows (matched by index label)."""
        return df.drop(index=self.outlier_index.intersection(df.index)).copy()

    # ------------------------------------------------------------------ plotting shortcuts
    def plot(self, **kwargs: object):
        """Plot standardized residuals against fitted values with the threshold lines."""
        from lwr_tlbx.plotting.regression_plots import plot_standardized_residuals  # noqa: PLC0415

        return plot_standardized_residuals(self, **kwargs)


class ResidualOutlierDetector(BaseAnalyser):
    r"""Flag observations with large standardized residuals of a preliminary OLS fit.

    A simple regression of the model-scale response on the model-scale predictor
    (log10/log10 for LWR) is fitted once. Residuals :math:`e_i` are scaled by their
    sample standard deviation :math:`s_e` and every row with
    :math:`|e_i / s_e| \geq k` is an outlier.

    Detection is single pass: residuals are not recomputed after removal, so
    running the filter on its own output is not part of the procedure.

    Attributes:
        threshold: Absolute standardized-residual limit ``k`` (default: 4.0).
    """

    def __init__(self, view: DatasetView, threshold: float = 4.0) -> None:
        """Initialize the residual outlier detector.

        Args:
            view: Immutable dataset view to analyze
            threshold: Absolute standardized residual cut-off (default: 4.0)
        """
        self._view = view
        self.threshold = threshold
        self._fitted = False
        self._z: pd.Series | None = None
        self._fitted_values: pd.Series | None = None

    def fit(self) -> Self:
        """Fit the preliminary regression and standardize its residuals.

        Returns:
            Self for method chaining.
        """
        y = self._view.response.astype(float)
        x = sm.add_constant(self._view.predictor.astype(float), has_constant="add")
        model = sm.OLS(y, x).fit()
        resid = pd.Series(model.resid, index=y.index)
        self._z = resid / resid.std(ddof=1)
        self._fitted_values = pd.Series(model.fittedvalues, index=y.index)
        self._fitted = True
        return self

    def result(self) -> OutlierDetectionResult:
        """Return outlier detection results.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        if not self._fitted or self._z is None or self._fitted_values is None:
            raise ValueError("Must call fit() before result()")

        return OutlierDetectionResult(
            standardized_residuals=self._z,
            outlier_mask=self._z.abs().ge(self.threshold),
            fitted=self._fitted_values,
            threshold=self.threshold,
            pretty_names=dict(self._view.pretty_by_col),
        )
