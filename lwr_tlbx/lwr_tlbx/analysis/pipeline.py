"""In-memory analysis chain: clean -> test dimorphism -> fit."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lwr_tlbx.config import DEFAULT_CONFIG, AnalysisConfig
from lwr_tlbx.data.morphometry_dataset import MorphometryDataset
from lwr_tlbx.data.relationship import RelationshipKind

from .cleaning import CleaningResult, clean
from .dimorphism import DimorphismResult
from .model_fitter import GroupedResult, ModelFit, fit_models
from .ols_helper import RegressionResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Results of every stage, passed explicitly to the reporting layer."""

    kind: RelationshipKind
    cleaning: CleaningResult
    dimorphism: DimorphismResult
    fit: ModelFit

    @property
    def pooled(self) -> RegressionResult | None:
        return self.fit.pooled

    @property
    def grouped(self) -> GroupedResult | None:
        return self.fit.grouped


def analyze(
    dataset: MorphometryDataset,
    kind: RelationshipKind | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> AnalysisOutcome:
    """Run cleaning, the ANCOVA decision and the selected fits on a loaded dataset.

    No file or network I/O happens here.

    Example:
        >>> ds = MorphometryDataset.from_excel("lwr.xlsx", RelationshipKind.LWR)
        >>> outcome = analyze(ds)
        >>> outcome.pooled.isometry.p_value if outcome.pooled else outcome.grouped
    """
    kind = kind or dataset.kind
    if kind is None:
        raise ValueError("A relationship kind is required to analyze the dataset.")

    cleaning = clean(dataset, kind, config)
    dimorphism = dataset.make_dimorphism_tester(kind, cleaning.sexed_df, alpha=config.alpha).fit().result()
    fit = fit_models(cleaning, dimorphism, config)
    return AnalysisOutcome(kind=kind, cleaning=cleaning, dimorphism=dimorphism, fit=fit)
