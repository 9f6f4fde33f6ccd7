"""Fitted relationship plots on the measurement scale."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.figure import Figure

from lwr_tlbx.data.morphometry_columns import MorphometryColumn as Col
from lwr_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


if TYPE_CHECKING:
    from lwr_tlbx.analysis.model_fitter import GroupedResult
    from lwr_tlbx.analysis.ols_helper import RegressionResult


def pretty_label(column: str) -> str:
    """Display name of a raw measurement column."""
    try:
        return Col(column).pretty_name
    except ValueError:
        return column.replace("_", " ").title()


def scope_label(scope: str) -> str:
    return "all fish" if scope == "pooled" else f"sex {scope}"


def equation_label(result: RegressionResult) -> str:
    """Fitted equation with R² and n, e.g. ``W = 0.0123·SL^3.01``."""
    if result.kind.log_scale:
        eq = f"W = {result.a:.4g}·SL^{result.slope:.3f}"
    else:
        eq = f"TL = {result.a:.4g} + {result.slope:.4f}·SL"
    return f"{eq}\n$R^2$ = {result.r2:.4f}, n = {result.n_obs}"


def _draw_fit(
    result: RegressionResult,
    ax: plt.Axes,
    *,
    color: str,
    n_points: int,
    plot_cfg: PlottingConfig,
    label: str | None = None,
) -> None:
    kind = result.kind
    x = result.data[kind.predictor_col]
    sns.scatterplot(
        x=x,
        y=result.data[kind.response_col],
        ax=ax,
        alpha=plot_cfg.point_alpha,
        color=color,
        edgecolor=None,
        label=label,
    )
    band = result.predict_band(np.linspace(x.min(), x.max(), n_points))
    ax.plot(band["predictor"], band["fit"], color=color, linewidth=2.0)
    ax.fill_between(band["predictor"], band["ci_lower"], band["ci_upper"], color=color, alpha=plot_cfg.band_alpha)


def plot_relationship(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
    n_points: int = 300,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> Figure:
    """Scatter of the observations with the fitted curve and its confidence band.

    For LWR the log-log fit and its band are back-transformed with ``10 **``, so
    the curve is :math:`W = a \\cdot SL^b` on raw axes; LLR is drawn as fitted.
    The band is the ``1 - alpha`` confidence interval of the mean response.

    Args:
        result: Fitted relationship for one scope.
        ax: Optional axes to draw on; a new figure is created otherwise.
        n_points: Number of grid points along the predictor range.
        plot_cfg: Style applied while drawing.

    Returns:
        The matplotlib Figure holding the plot.
    """
    with plot_cfg.apply():
        if ax is None:
            fig, ax = plt.subplots(figsize=plot_cfg.figsize)
        else:
            fig = ax.figure
        _draw_fit(result, ax, color=plot_cfg.line_color, n_points=n_points, plot_cfg=plot_cfg)
        ax.text(
            0.03,
            0.97,
            equation_label(result),
            transform=ax.transAxes,
            va="top",
            ha="left",
            bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.8},
        )
        ax.set_xlabel(pretty_label(result.kind.predictor_col))
        ax.set_ylabel(pretty_label(result.kind.response_col))
        ax.set_title(f"{result.kind.title} ({scope_label(result.scope)}) ±{100 * (1 - result.alpha):.0f}% CI")
        fig.tight_layout()
    return fig


def plot_grouped_relationships(
    grouped: GroupedResult,
    *,
    n_points: int = 300,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> Figure:
    """Overlay the per-sex fits in one axes, one colour per sex."""
    with plot_cfg.apply():
        fig, ax = plt.subplots(figsize=plot_cfg.figsize)
        colors = sns.color_palette(plot_cfg.palette, n_colors=max(len(grouped), 1))
        for color, (sex, result) in zip(colors, grouped.items(), strict=False):
            _draw_fit(
                result,
                ax,
                color=color,
                n_points=n_points,
                plot_cfg=plot_cfg,
                label=f"{scope_label(str(sex))} (n = {result.n_obs})",
            )
        if len(grouped):
            first = next(iter(grouped.values()))
            ax.set_xlabel(pretty_label(first.kind.predictor_col))
            ax.set_ylabel(pretty_label(first.kind.response_col))
            ax.set_title(f"{first.kind.title} by sex")
            ax.legend()
        fig.tight_layout()
    return fig
