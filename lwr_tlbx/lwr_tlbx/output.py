"""Write fitted relationships to xlsx parameter tables and PNG figures.

This module is the boundary between the in-memory analysis and the files a
run leaves behind. Everything is written through an :class:`OutputSink`, so
callers decide whether artifacts land in a directory or in memory.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

import matplotlib.pyplot as plt
import pandas as pd

from lwr_tlbx.plotting.regression_plots import plot_standardized_residuals
from lwr_tlbx.plotting.relationship_plots import plot_grouped_relationships, plot_relationship
from lwr_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from lwr_tlbx.analysis.model_fitter import GroupedResult
    from lwr_tlbx.analysis.ols_helper import RegressionResult
    from lwr_tlbx.analysis.pipeline import AnalysisOutcome


logger = logging.getLogger(__name__)

_EXCEL_SHEET_NAME_MAX = 31


class OutputSink(Protocol):
    """Destination for named artifacts (a path or a writable binary stream per name)."""

    def target(self, name: str) -> str | Path | BinaryIO: ...


class DirectorySink:
    """Write artifacts as files below ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def target(self, name: str) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root / name

    def __repr__(self) -> str:
        return f"DirectorySink({str(self.root)!r})"


class MemorySink:
    """Collect artifacts in in-memory buffers keyed by name."""

    def __init__(self) -> None:
        self.buffers: dict[str, io.BytesIO] = {}

    def target(self, name: str) -> io.BytesIO:
        buffer = io.BytesIO()
        self.buffers[name] = buffer
        return buffer

    def getvalue(self, name: str) -> bytes:
        return self.buffers[name].getvalue()


def sheet_name(result: RegressionResult) -> str:
    """``pooled`` for the pooled fit, ``sex_<code>`` for a per-sex fit."""
    name = "pooled" if result.scope == "pooled" else f"sex_{result.scope}"
    return name[:_EXCEL_SHEET_NAME_MAX]


def summary_table(result: RegressionResult) -> pd.DataFrame:
    """Scalar results of one fit as a two-column ``statistic``/``value`` table.

    Holds R², n, the observed min/max of both measurements and, for LWR, the
    test of the slope against isometric growth.
    """
    rows: list[tuple[str, object]] = [
        ("relationship", result.kind.value.upper()),
        ("scope", result.scope),
        ("n", result.n_obs),
        ("r2", result.r2),
        ("adj_r2", result.metrics.adj_r2),
        ("rmse", result.metrics.rmse),
        ("confidence_level", 1 - result.alpha),
    ]
    for measurement, bounds in result.ranges.iterrows():
        rows.append((f"{measurement}_min", float(bounds["min"])))
        rows.append((f"{measurement}_max", float(bounds["max"])))
    if result.isometry is not None:
        test = result.isometry
        rows.extend(
            [
                ("b_reference", test.reference),
                ("b_std_error", test.std_error),
                ("t_statistic", test.t_statistic),
                ("df", test.df),
                ("p_value", test.p_value),
                ("growth_type", test.growth_type),
            ],
        )
    return pd.DataFrame(rows, columns=["statistic", "value"])


def write_parameter_workbook(
    results: Sequence[RegressionResult],
    target: str | Path | BinaryIO,
) -> None:
    """Write one sheet per fitted scope: the parameter table, then the summary block."""
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for result in results:
            name = sheet_name(result)
            result.parameters.to_excel(writer, sheet_name=name, startrow=0)
            summary_table(result).to_excel(
                writer,
                sheet_name=name,
                startrow=len(result.parameters) + 3,
                index=False,
            )


def save_figure(fig: Figure, target: str | Path | BinaryIO, *, dpi: int = DEFAULT_PLOT_CFG.savefig_dpi) -> None:
    """Save ``fig`` as PNG and release it."""
    try:
        fig.savefig(target, format="png", dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)


def _export_results(
    results: Sequence[RegressionResult],
    sink: OutputSink,
    prefix: str,
    plot_cfg: PlottingConfig,
) -> list[str]:
    written = [f"{prefix}_parameters.xlsx"]
    write_parameter_workbook(results, sink.target(written[0]))
    for result in results:
        name = f"{prefix}_{sheet_name(result)}.png"
        save_figure(plot_relationship(result, plot_cfg=plot_cfg), sink.target(name), dpi=plot_cfg.savefig_dpi)
        written.append(name)
    return written


def export_pooled(
    result: RegressionResult | None,
    sink: OutputSink,
    *,
    prefix: str,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> list[str]:
    """Export the pooled fit; logs a warning and writes nothing when it is absent."""
    if result is None:
        logger.warning("No pooled regression result available; skipping pooled export")
        return []
    return _export_results([result], sink, prefix, plot_cfg)


def export_grouped(
    grouped: GroupedResult | None,
    sink: OutputSink,
    *,
    prefix: str,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> list[str]:
    """Export the per-sex fits; logs a warning and writes nothing when they are absent."""
    if not grouped:
        logger.warning("No per-sex regression results available; skipping grouped export")
        return []
    written = _export_results(list(grouped.values()), sink, prefix, plot_cfg)
    overlay = f"{prefix}_by_sex.png"
    save_figure(
        plot_grouped_relationships(grouped, plot_cfg=plot_cfg),
        sink.target(overlay),
        dpi=plot_cfg.savefig_dpi,
    )
    return [*written, overlay]


def export_outcome(
    outcome: AnalysisOutcome,
    sink: OutputSink,
    *,
    plot_cfg: PlottingConfig = DEFAULT_PLOT_CFG,
) -> list[str]:
    """Write the outlier diagnostic and the results of the path the ANCOVA selected.

    Returns:
        Names of the artifacts written to ``sink``.
    """
    prefix = outcome.kind.value
    outlier_plot = f"{prefix}_outliers.png"
    save_figure(
        plot_standardized_residuals(outcome.cleaning.outliers, plot_cfg=plot_cfg),
        sink.target(outlier_plot),
        dpi=plot_cfg.savefig_dpi,
    )
    written = [outlier_plot]

    if outcome.dimorphism.is_dimorphic:
        written += export_grouped(outcome.grouped, sink, prefix=prefix, plot_cfg=plot_cfg)
    else:
        written += export_pooled(outcome.pooled, sink, prefix=prefix, plot_cfg=plot_cfg)

    for name in written:
        logger.info("Wrote %s", name)
    return written


__all__ = [
    "DirectorySink",
    "MemorySink",
    "OutputSink",
    "export_grouped",
    "export_outcome",
    "export_pooled",
    "save_figure",
    "sheet_name",
    "summary_table",
    "write_parameter_workbook",
]
