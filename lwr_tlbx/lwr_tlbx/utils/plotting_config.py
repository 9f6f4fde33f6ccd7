"""Shared plotting configuration (style, palette, font sizes)."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import matplotlib as mpl
import seaborn as sns


@dataclass
class PlottingConfig:
    """Style of the exported relationship and diagnostic figures.

    Figures are drawn inside :meth:`apply`; global matplotlib state is left
    untouched once the context exits.
    """

    style: str = "whitegrid"
    palette: str | list[str] = "tab10"
    font_family: str = "DejaVu Sans"
    font_scale: float = 1.0
    title_size: int = 14
    label_size: int = 12
    tick_size: int = 10
    figure_dpi: int = 100
    savefig_dpi: int = 200
    """Resolution of the PNG files written by the exporter."""
    figsize: tuple[float, float] = (8.0, 6.0)
    context: str = "notebook"
    point_alpha: float = 0.45
    """Opacity of the observation scatter."""
    line_color: str = "tab:red"
    """Colour of a single fitted curve and its confidence band."""
    band_alpha: float = 0.2
    rc_overrides: dict[str, Any] = field(default_factory=dict)
    """Extra matplotlib rcParams applied last."""

    def rc_params(self) -> dict[str, Any]:
        """Matplotlib rcParams implied by this configuration."""
        return {
            "axes.titlesize": self.title_size,
            "axes.labelsize": self.label_size,
            "xtick.labelsize": self.tick_size,
            "ytick.labelsize": self.tick_size,
            "figure.dpi": self.figure_dpi,
            "savefig.dpi": self.savefig_dpi,
            "axes.prop_cycle": mpl.cycler(color=sns.color_palette(self.palette)),
            "font.family": [self.font_family],
            **self.rc_overrides,
        }

    @contextmanager
    def apply(self) -> Generator[None]:
        """Apply the seaborn style and rcParams within a context."""
        with (
            sns.axes_style(self.style),
            sns.plotting_context(self.context, font_scale=self.font_scale),
            mpl.rc_context(self.rc_params()),
        ):
            yield


# Default configuration used across plotting functions
DEFAULT_PLOT_CFG = PlottingConfig()


__all__ = ["DEFAULT_PLOT_CFG", "PlottingConfig"]
