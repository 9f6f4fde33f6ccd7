"""Task-specific views over dataset content."""

from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd

from .relationship import RelationshipKind


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of dataset data and related metadata.

    Attributes:
        df: Dataframe slice containing the raw measurement columns and the model terms.
        kind: Relationship the view is prepared for.
        pretty_by_col: Mapping from column names to display-friendly labels.
        sex_col: Name of the sex code column.
    """

    df: pd.DataFrame
    """Dataframe slice containing the raw measurement columns and the model terms."""
    kind: RelationshipKind
    pretty_by_col: Mapping[str, str]
    """Mapping from column names to display-friendly labels."""
    sex_col: str = "Sex"

    @property
    def response(self) -> pd.Series:
        """Model-scale response (log10 weight for LWR, total length for LLR)."""
        return self.df[self.kind.response_term]

    @property
    def predictor(self) -> pd.Series:
        """Model-scale predictor (log10 standard length for LWR)."""
        return self.df[self.kind.predictor_term]

    @property
    def n_obs(self) -> int:
        return len(self.df)
