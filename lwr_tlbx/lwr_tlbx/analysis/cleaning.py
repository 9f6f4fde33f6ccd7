"""Row filters applied before any model is fitted.

Three independent predicates are applied in order, each returning a new frame:

1. zero total length (LLR only),
2. standardized residual of the preliminary fit ``>= threshold`` (single pass),
3. undefined sex code.

Two frames coexist afterwards: ``pooled_df`` keeps undefined-sex fish (it feeds
the pooled regression) while ``sexed_df`` drops them (it feeds the ANCOVA and
the per-sex regressions).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from lwr_tlbx.config import DEFAULT_CONFIG, AnalysisConfig
from lwr_tlbx.data.morphometry_columns import MorphometryColumn as Col
from lwr_tlbx.data.morphometry_dataset import MorphometryDataset
from lwr_tlbx.data.relationship import RelationshipKind

from .outlier_detector import OutlierDetectionResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleaningResult:
    """Filtered frames and bookkeeping of the cleaning stage."""

    kind: RelationshipKind
    loaded_df: pd.DataFrame
    """Frame as loaded (after dropping missing values); kept for diagnostics."""
    pooled_df: pd.DataFrame
    """Invalid rows and outliers removed, undefined sex retained."""
    sexed_df: pd.DataFrame
    """Invalid rows, outliers and undefined sex removed."""
    outliers: OutlierDetectionResult
    n_zero_removed: int
    n_undefined_sex_removed: int

    @property
    def n_outliers_removed(self) -> int:
        return self.outliers.n_outliers

    def summary(self) -> pd.DataFrame:
        """Row counts after each step as a tidy table."""
        return pd.DataFrame(
            {
                "step": ["loaded", "zero_length_removed", "outliers_removed", "undefined_sex_removed"],
                "rows_removed": [0, self.n_zero_removed, self.n_outliers_removed, self.n_undefined_sex_removed],
                "rows_remaining": [
                    len(self.loaded_df),
                    len(self.loaded_df) - self.n_zero_removed,
                    len(self.pooled_df),
                    len(self.sexed_df),
                ],
            },
        )


def drop_zero_measurements(df: pd.DataFrame, kind: RelationshipKind) -> pd.DataFrame:
    """Drop rows with a total length of zero (LLR only; LWR frames are returned as a copy)."""
    if kind is not RelationshipKind.LLR:
        return df.copy()
    return df.loc[df[Col.T_LENGTH] != 0].copy()


def drop_undefined_sex(df: pd.DataFrame, undefined_sex: int = DEFAULT_CONFIG.undefined_sex) -> pd.DataFrame:
    """Drop rows whose sex code equals the undefined sentinel."""
    return df.loc[df[Col.SEX] != undefined_sex].copy()


def clean(
    dataset: MorphometryDataset,
    kind: RelationshipKind | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> CleaningResult:
    """Apply the three row filters and return both filtered frames.

    The zero-length filter runs before outlier detection so that invalid rows
    never enter the preliminary regression.
    """
    kind = kind or dataset.kind
    if kind is None:
        raise ValueError("A relationship kind is required to clean the dataset.")

    loaded = dataset.df
    valid = drop_zero_measurements(loaded, kind)
    n_zero = len(loaded) - len(valid)
    if n_zero:
        logger.info("Removed %d row(s) with zero %s", n_zero, Col.T_LENGTH)

    outliers = dataset.make_outlier_detector(kind, valid, threshold=config.outlier_threshold).fit().result()
    pooled = outliers.filter(valid)
    logger.info(
        "Removed %d outlier(s) with |standardized residual| >= %g",
        outliers.n_outliers,
        config.outlier_threshold,
    )

    sexed = drop_undefined_sex(pooled, config.undefined_sex)
    n_undefined = len(pooled) - len(sexed)
    logger.info("Removed %d row(s) with undefined sex (code %d)", n_undefined, config.undefined_sex)

    return CleaningResult(
        kind=kind,
        loaded_df=loaded,
        pooled_df=pooled,
        sexed_df=sexed,
        outliers=outliers,
        n_zero_removed=n_zero,
        n_undefined_sex_removed=n_undefined,
    )
