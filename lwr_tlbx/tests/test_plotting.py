"""Smoke tests for relationship and diagnostic plots."""

from collections.abc import Iterator

import matplotlib as mpl
import matplotlib.pyplot as plt
import pandas as pd
import pytest
from matplotlib.figure import Figure

from lwr_tlbx.analysis import analyze
from lwr_tlbx.analysis.ols_helper import RegressionResult, fit_relationship
from lwr_tlbx.data import MorphometryDataset, RelationshipKind
from lwr_tlbx.plotting import (
    plot_grouped_relationships,
    plot_relationship,
    plot_residual_diags,
    plot_standardized_residuals,
)
from lwr_tlbx.plotting.relationship_plots import equation_label, scope_label
from lwr_tlbx.utils.plotting_config import PlottingConfig


@pytest.fixture(autouse=True)
def _close_figures() -> Iterator[None]:
    yield
    plt.close("all")


@pytest.fixture
def lwr_result(noisy_lwr_df: pd.DataFrame) -> RegressionResult:
    return fit_relationship(noisy_lwr_df, RelationshipKind.LWR)


class TestRelationshipPlots:
    """Test fitted relationship figures."""

    def test_plot_relationship_labels(self, lwr_result: RegressionResult) -> None:
        fig = plot_relationship(lwr_result)
        ax = fig.axes[0]

        assert isinstance(fig, Figure)
        assert ax.get_xlabel() == "Standard Length"
        assert ax.get_ylabel() == "Weight"
        assert "Length-Weight Relationship" in ax.get_title()
        assert "95% CI" in ax.get_title()

    def test_fitted_curve_is_back_transformed(self, lwr_result: RegressionResult) -> None:
        ax = plot_relationship(lwr_result, n_points=50).axes[0]
        line = ax.get_lines()[0]

        assert len(line.get_xdata()) == 50
        assert line.get_ydata().min() > 0

    def test_plot_on_existing_axes(self, lwr_result: RegressionResult) -> None:
        fig, ax = plt.subplots()
        assert lwr_result.plot(ax=ax) is fig

    def test_grouped_overlay_has_one_entry_per_sex(self, dimorphic_llr_df: pd.DataFrame) -> None:
        outcome = analyze(MorphometryDataset(dimorphic_llr_df, RelationshipKind.LLR))
        fig = plot_grouped_relationships(outcome.grouped)

        legend = fig.axes[0].get_legend()
        assert [t.get_text() for t in legend.get_texts()] == ["sex 1 (n = 60)", "sex 2 (n = 60)"]

    def test_labels(self, lwr_result: RegressionResult, llr_df: pd.DataFrame) -> None:
        assert scope_label("pooled") == "all fish"
        assert scope_label("2") == "sex 2"
        assert equation_label(lwr_result).startswith("W = ")
        llr_result = fit_relationship(llr_df.iloc[:100], RelationshipKind.LLR)
        assert equation_label(llr_result).startswith("TL = ")


class TestDiagnosticPlots:
    """Test outlier and residual diagnostics."""

    def test_standardized_residuals_threshold_lines(self, noisy_lwr_df: pd.DataFrame) -> None:
        ds = MorphometryDataset(noisy_lwr_df, RelationshipKind.LWR)
        outliers = ds.make_outlier_detector(RelationshipKind.LWR).fit().result()
        fig = plot_standardized_residuals(outliers)

        levels = {line.get_ydata()[0] for line in fig.axes[0].get_lines()}
        assert {4.0, -4.0, 0.0} <= levels

    def test_outlier_result_plot_shortcut(self, noisy_lwr_df: pd.DataFrame) -> None:
        ds = MorphometryDataset(noisy_lwr_df, RelationshipKind.LWR)
        outliers = ds.make_outlier_detector(RelationshipKind.LWR).fit().result()
        assert isinstance(outliers.plot(), Figure)

    def test_residual_diags(self, lwr_result: RegressionResult) -> None:
        fig = plot_residual_diags(lwr_result)
        assert len(fig.axes) == 2
        assert isinstance(lwr_result.plot_residual_diags(), Figure)


class TestPlottingConfig:
    """Test the temporary plot style."""

    def test_apply_restores_rc_params(self) -> None:
        before = mpl.rcParams["axes.titlesize"]
        cfg = PlottingConfig(title_size=31)
        with cfg.apply():
            assert mpl.rcParams["axes.titlesize"] == 31
        assert mpl.rcParams["axes.titlesize"] == before
