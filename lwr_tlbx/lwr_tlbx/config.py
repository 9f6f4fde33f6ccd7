"""Analysis settings shared by the cleaning, testing and fitting stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds and constants of the LWR/LLR pipeline.

    The defaults reproduce the reference analysis; override them only for
    sensitivity checks.
    """

    outlier_threshold: float = 4.0
    """Rows with ``|standardized residual| >= outlier_threshold`` are dropped."""

    alpha: float = 0.05
    """Significance level of the ANCOVA decision rule and of all confidence intervals."""

    reference_slope: float = 3.0
    """Slope of isometric growth tested against the LWR slope."""

    undefined_sex: int = 9
    """Sentinel sex code for individuals whose sex could not be determined."""

    def __post_init__(self) -> None:
        if self.outlier_threshold <= 0:
            raise ValueError(f"outlier_threshold must be positive, got {self.outlier_threshold}")
        if not 0 < self.alpha < 1:
            raise ValueError(f"alpha must lie in (0, 1), got {self.alpha}")


DEFAULT_CONFIG = AnalysisConfig()


__all__ = ["DEFAULT_CONFIG", "AnalysisConfig"]
