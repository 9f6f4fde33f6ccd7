"""The two morphometric relationships fitted by the toolbox."""

from __future__ import annotations

from enum import StrEnum

import numpy as np
import pandas as pd

from .morphometry_columns import MorphometryColumn as Col


class RelationshipKind(StrEnum):
    r"""Which measurement pair is modelled and on which scale.

    - ``LWR``: :math:`\log_{10} W = \log_{10} a + b \log_{10} SL`, i.e. :math:`W = a \cdot SL^b`.
    - ``LLR``: :math:`TL = a + b \cdot SL`.
    """

    LWR = "lwr"
    LLR = "llr"

    @property
    def response_col(self) -> str:
        """Raw response column in the input spreadsheet."""
        return Col.WEIGHT if self is RelationshipKind.LWR else Col.T_LENGTH

    @property
    def predictor_col(self) -> str:
        """Raw predictor column in the input spreadsheet."""
        return Col.S_LENGTH

    @property
    def log_scale(self) -> bool:
        """Whether response and predictor are log10-transformed before fitting."""
        return self is RelationshipKind.LWR

    @property
    def required_columns(self) -> list[str]:
        return [self.response_col, self.predictor_col, Col.SEX]

    @property
    def response_term(self) -> str:
        """Column name of the (possibly transformed) response in the model frame."""
        return f"log10_{self.response_col}" if self.log_scale else self.response_col

    @property
    def predictor_term(self) -> str:
        """Column name of the (possibly transformed) predictor in the model frame."""
        return f"log10_{self.predictor_col}" if self.log_scale else self.predictor_col

    @property
    def title(self) -> str:
        return "Length-Weight Relationship" if self.log_scale else "Length-Length Relationship"

    def model_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return ``df`` with the model terms attached (log10 columns for LWR).

        The input frame is not modified; a new frame is returned.
        """
        if not self.log_scale:
            return df.copy()
        return df.assign(
            **{
                self.response_term: np.log10(df[self.response_col].astype(float)),
                self.predictor_term: np.log10(df[self.predictor_col].astype(float)),
            },
        )

    def to_response_scale(self, values: np.ndarray | pd.Series) -> np.ndarray | pd.Series:
        """Map model-scale response values back to the raw measurement scale."""
        return np.power(10.0, values) if self.log_scale else values

    def to_model_scale(self, values: np.ndarray | pd.Series) -> np.ndarray | pd.Series:
        """Map raw predictor values onto the model scale."""
        return np.log10(values) if self.log_scale else values
