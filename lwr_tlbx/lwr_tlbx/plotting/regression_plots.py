"""Plotting helpers for regression diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import seaborn as sns
from statsmodels.graphics.gofplots import qqplot

from lwr_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from lwr_tlbx.analysis.ols_helper import RegressionResult
    from lwr_tlbx.analysis.outlier_detector import OutlierDetectionResult


def plot_standardized_residuals(
    result: OutlierDetectionResult,
    *,
    ax: plt.Axes | None = None,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> Figure:
    """Standardized residuals of the preliminary fit with the ``±threshold`` cut-offs.

    Flagged rows are drawn in red; they are the rows removed by the outlier filter.
    """
    with plot_cfg.apply():
        if ax is None:
            fig, ax = plt.subplots(figsize=plot_cfg.figsize)
        else:
            fig = ax.figure
        flagged = result.outlier_mask
        sns.scatterplot(
            x=result.fitted[~flagged],
            y=result.standardized_residuals[~flagged],
            ax=ax,
            alpha=plot_cfg.point_alpha,
            label="kept",
        )
        if flagged.any():
            sns.scatterplot(
                x=result.fitted[flagged],
                y=result.standardized_residuals[flagged],
                ax=ax,
                color="tab:red",
                marker="X",
                s=80,
                label=f"outlier (n = {int(flagged.sum())})",
            )
        for level in (result.threshold, -result.threshold):
            ax.axhline(level, ls="--", color="tab:red", linewidth=1)
        ax.axhline(0, color="grey", linewidth=0.8)
        ax.set_xlabel("Fitted values")
        ax.set_ylabel("Standardized residuals")
        ax.set_title(f"Outlier screening (|z| ≥ {result.threshold:g} removed)")
        ax.legend()
        fig.tight_layout()
    return fig


def _residual_unit(result: RegressionResult) -> str:
    return "Residuals (log10 units)" if result.kind.log_scale else "Residuals"


def plot_residuals_vs_fitted(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
    point_alpha: float = DEFAULT_PLOT_CFG.point_alpha,
) -> plt.Axes:
    """Model-scale residuals against fitted values with a LOWESS smooth.

    Curvature in the smooth points at a misspecified relationship (e.g. an LLR
    that is not linear over the observed length range).
    """
    ax = ax or plt.gca()
    sns.residplot(
        x=result.model.fittedvalues,
        y=result.model.resid,
        lowess=True,
        ax=ax,
        scatter_kws={"alpha": point_alpha},
        line_kws={"color": DEFAULT_PLOT_CFG.line_color},
    )
    ax.set_xlabel(f"Fitted {result.kind.response_term}")
    ax.set_ylabel(_residual_unit(result))
    ax.set_title("Residuals vs fitted")
    return ax


def plot_qq(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Normal Q-Q plot of the internally studentized residuals."""
    ax = ax or plt.gca()
    qqplot(result.model.get_influence().resid_studentized_internal, line="45", fit=True, ax=ax)
    ax.set_title(f"Normal Q-Q (n = {result.n_obs})")
    return ax


def plot_residual_diags(
    result: RegressionResult,
    *,
    figsize: tuple[float, float] = (12.0, 5.0),
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> Figure:
    """Residuals vs fitted and normal Q-Q plot side by side."""
    with plot_cfg.apply():
        fig, axes = plt.subplots(1, 2, figsize=figsize)
        plot_residuals_vs_fitted(result, ax=axes[0], point_alpha=plot_cfg.point_alpha)
        plot_qq(result, ax=axes[1])
        fig.suptitle(f"{result.kind.title}: residual diagnostics ({result.scope})")
        fig.tight_layout()
    return fig
