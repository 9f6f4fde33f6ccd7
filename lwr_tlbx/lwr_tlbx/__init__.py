"""Length-weight and length-length relationship toolbox for fish morphometry.

Modules:
    - data: Downloads, parses and validates the measurement spreadsheets.
    - analysis: Cleaning, ANCOVA dimorphism test and OLS relationship fits.
    - plotting: Fitted relationship plots and regression diagnostics.
    - output: Writes parameter workbooks and figures through an output sink.
"""

__version__ = "0.1.0"

from .analysis import AnalysisOutcome, analyze
from .config import AnalysisConfig
from .data import MorphometryDataset, RelationshipKind
from .errors import DataParseError, DataRetrievalError, LwrTlbxError
from .output import DirectorySink, MemorySink, export_outcome


__all__ = [
    "AnalysisConfig",
    "AnalysisOutcome",
    "DataParseError",
    "DataRetrievalError",
    "DirectorySink",
    "LwrTlbxError",
    "MemorySink",
    "MorphometryDataset",
    "RelationshipKind",
    "analyze",
    "export_outcome",
]
