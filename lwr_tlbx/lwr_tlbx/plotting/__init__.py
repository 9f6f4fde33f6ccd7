"""Plotting utilities for fitted relationships and their diagnostics."""

from .regression_plots import (
    plot_qq,
    plot_residual_diags,
    plot_residuals_vs_fitted,
    plot_standardized_residuals,
)
from .relationship_plots import plot_grouped_relationships, plot_relationship


__all__ = [
    "plot_grouped_relationships",
    "plot_qq",
    "plot_relationship",
    "plot_residual_diags",
    "plot_residuals_vs_fitted",
    "plot_standardized_residuals",
]
