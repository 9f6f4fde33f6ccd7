"""Base class of the measurement datasets: loading contract, views and analyzer factories."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd


if TYPE_CHECKING:
    from lwr_tlbx.analysis.dimorphism import DimorphismTester
    from lwr_tlbx.analysis.outlier_detector import ResidualOutlierDetector

from .base_columns import BaseColumn
from .relationship import RelationshipKind
from .views import DatasetView


class BaseDataset(ABC):
    """Abstract base class for dataset handlers used throughout the toolbox."""

    Col: type[BaseColumn]
    sex_col: str = "Sex"

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        """Wrap an already loaded frame.

        Args:
            df: Validated measurement frame, or None until loaded
        """
        self._df: pd.DataFrame | None = df

    @classmethod
    @abstractmethod
    def from_excel(cls, filepath: str | Path, kind: RelationshipKind, **kwargs: object) -> "BaseDataset":
        """Load dataset from a spreadsheet file.

        Args:
            filepath: Path to the spreadsheet
            kind: Relationship whose columns must be present
            **kwargs: Reader options such as the worksheet

        Returns:
            Dataset holding the validated measurement frame
        """
        ...

    @property
    def df(self) -> pd.DataFrame:
        """Get the loaded DataFrame.

        Raises:
            ValueError: If dataset not loaded
        """
        if self._df is None:
            raise ValueError("Dataset not loaded. Use from_excel() to load data.")
        return self._df

    def __len__(self) -> int:
        return len(self.df)

    def get_pretty_name(self, column_name: str) -> str:
        """Display name of a raw column or a log10 model term.

        Args:
            column_name: Column name (raw or a ``log10_`` model term)

        Returns:
            Label used on plot axes and in exported tables
        """
        if column_name.startswith("log10_"):
            return f"log10({self.get_pretty_name(column_name.removeprefix('log10_'))})"
        try:
            col_enum = self.Col(column_name)
        except ValueError:
            # Fallback: replace underscores if not in enum
            return column_name.replace("_", " ").title()
        else:
            return str(col_enum.pretty_name)

    def view(self, kind: RelationshipKind, df: pd.DataFrame | None = None) -> DatasetView:
        """Build the immutable view consumed by the analyzers.

        Args:
            kind: Relationship whose model terms are attached to the view
            df: Frame to wrap instead of the loaded one (e.g. a cleaned subset)

        Returns:
            DatasetView with the required columns and the model terms of ``kind``
        """
        frame = kind.model_frame((self.df if df is None else df).loc[:, kind.required_columns])
        return DatasetView(
            df=frame,
            kind=kind,
            pretty_by_col={col: self.get_pretty_name(col) for col in frame.columns},
            sex_col=self.sex_col,
        )

    def make_outlier_detector(
        self,
        kind: RelationshipKind,
        df: pd.DataFrame | None = None,
        threshold: float = 4.0,
    ) -> "ResidualOutlierDetector":
        """Instantiate a residual outlier detector for ``kind``.

        Example:
            >>> ds = MorphometryDataset.load("fish.xlsx", RelationshipKind.LLR)
            >>> outliers = ds.make_outlier_detector(RelationshipKind.LLR).fit().result()
            >>> outliers.n_outliers
        """
        from lwr_tlbx.analysis.outlier_detector import ResidualOutlierDetector

        return ResidualOutlierDetector(self.view(kind, df), threshold=threshold)

    def make_dimorphism_tester(
        self,
        kind: RelationshipKind,
        df: pd.DataFrame | None = None,
        alpha: float = 0.05,
    ) -> "DimorphismTester":
        """Instantiate an ANCOVA sex-dimorphism tester for ``kind``."""
        from lwr_tlbx.analysis.dimorphism import DimorphismTester

        return DimorphismTester(self.view(kind, df), alpha=alpha)
