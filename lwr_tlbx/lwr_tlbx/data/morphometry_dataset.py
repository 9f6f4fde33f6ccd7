"""Loading and validation of the fish morphometry spreadsheets."""

import logging
import zipfile
from pathlib import Path

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from lwr_tlbx.errors import DataParseError

from .base_dataset import BaseDataset
from .fetch import fetch_dataset
from .morphometry_columns import MorphometryColumn as Col
from .relationship import RelationshipKind
from .views import DatasetView


logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".csv")


class MorphometryDataset(BaseDataset):
    """Fish measurements (lengths, weight, sex code) for LWR/LLR analyses.

    **Example workflow**:
    >>> from lwr_tlbx.data import MorphometryDataset, RelationshipKind
    >>> ds = MorphometryDataset.load("https://example.org/lwr.xlsx", RelationshipKind.LWR)
    >>> view = ds.view(RelationshipKind.LWR)
    >>> view.response.head()
    """

    Col = Col
    sex_col = Col.SEX

    def __init__(self, df: pd.DataFrame | None = None, kind: RelationshipKind | None = None) -> None:
        super().__init__(df)
        self.kind = kind

    @classmethod
    def load(
        cls,
        source: str | Path,
        kind: RelationshipKind,
        *,
        cache_path: str | Path | None = None,
        refresh: bool = False,
    ) -> "MorphometryDataset":
        """Fetch ``source`` if needed and parse it (see :func:`fetch_dataset`)."""
        path = fetch_dataset(source, cache_path, refresh=refresh)
        return cls.from_excel(path, kind)

    @classmethod
    def from_excel(
        cls,
        filepath: str | Path,
        kind: RelationshipKind,
        *,
        sheet_name: str | int = 0,
    ) -> "MorphometryDataset":
        """Load and validate a morphometry spreadsheet.

        - Read ``.xlsx`` with openpyxl, or ``.csv``; any other suffix is rejected
        - Check that the columns required by ``kind`` exist
        - Coerce measurements to float and the sex code to int
        - Drop rows with any missing value

        Args:
            filepath: Path to the spreadsheet
            kind: Relationship whose columns must be present
            sheet_name: Worksheet to read from an Excel workbook

        Returns:
            MorphometryDataset with only the columns required by ``kind``

        Raises:
            DataParseError: If the file cannot be parsed or a required column is missing or non-numeric
        """
        path = Path(filepath)
        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise DataParseError(
                f"Unsupported file type {suffix or path.name!r} for {path}; expected one of {SUPPORTED_SUFFIXES}",
            )
        try:
            if suffix == ".csv":
                raw = pd.read_csv(path)
            else:
                raw = pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl")
        except (ValueError, KeyError, OSError, zipfile.BadZipFile, InvalidFileException, pd.errors.ParserError) as exc:
            raise DataParseError(f"{path} is not a readable spreadsheet: {exc}") from exc

        df = raw.pipe(cls._normalize_col_names).pipe(cls._select_columns, kind=kind)
        n_raw = len(df)
        df = df.dropna(axis=0, how="any").pipe(cls._convert_data_types).reset_index(drop=True)
        logger.info("Loaded %d rows from %s (%d dropped for missing values)", len(df), path.name, n_raw - len(df))
        return cls(df=df, kind=kind)

    @staticmethod
    def _normalize_col_names(df: pd.DataFrame) -> pd.DataFrame:
        """Strip surrounding whitespace from the headers."""
        return df.set_axis(df.columns.astype(str).str.strip(), axis=1)

    @staticmethod
    def _select_columns(df: pd.DataFrame, *, kind: RelationshipKind) -> pd.DataFrame:
        missing = [col for col in kind.required_columns if col not in df.columns]
        if missing:
            raise DataParseError(
                f"Missing required column(s) {missing} for {kind.value.upper()}; found {df.columns.tolist()}",
            )
        return df.loc[:, kind.required_columns]

    @staticmethod
    def _convert_data_types(df: pd.DataFrame) -> pd.DataFrame:
        """Coerce every column to the dtype declared in its metadata (float64 or int64)."""
        try:
            converted = df.apply(pd.to_numeric, errors="raise")
        except (ValueError, TypeError) as exc:
            raise DataParseError(f"Non-numeric value in measurement table: {exc}") from exc

        sex = converted[Col.SEX]
        if not (sex == sex.round()).all():
            raise DataParseError("Sex codes must be integers")
        return converted.astype({col: Col(col).dtype_name for col in converted.columns})

    def view(self, kind: RelationshipKind | None = None, df: pd.DataFrame | None = None) -> DatasetView:
        """Build the view for ``kind``, defaulting to the relationship the dataset was loaded for."""
        kind = kind or self.kind
        if kind is None:
            raise ValueError("No relationship kind given and none stored on the dataset.")
        return super().view(kind, df)
