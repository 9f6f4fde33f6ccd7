"""Analysis modules: cleaning, dimorphism testing and regression fitting."""

from .cleaning import CleaningResult, clean, drop_undefined_sex, drop_zero_measurements
from .dimorphism import DimorphismResult, DimorphismTester
from .model_fitter import GroupedResult, ModelFit, fit_by_sex, fit_models, fit_pooled
from .ols_helper import IsometryTestResult, MetricsResult, RegressionResult, fit_relationship, slope_test
from .outlier_detector import OutlierDetectionResult, ResidualOutlierDetector
from .pipeline import AnalysisOutcome, analyze


__all__ = [
    "AnalysisOutcome",
    "CleaningResult",
    "DimorphismResult",
    "DimorphismTester",
    "GroupedResult",
    "IsometryTestResult",
    "MetricsResult",
    "ModelFit",
    "OutlierDetectionResult",
    "RegressionResult",
    "ResidualOutlierDetector",
    "analyze",
    "clean",
    "drop_undefined_sex",
    "drop_zero_measurements",
    "fit_by_sex",
    "fit_models",
    "fit_pooled",
    "fit_relationship",
    "slope_test",
]
