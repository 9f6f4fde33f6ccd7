"""Base column definitions and metadata structures."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class ColumnMetadata:
    """Metadata for a spreadsheet column.

    Attributes:
        original_name: Column header as it appears in the input spreadsheet.
        dtype: pandas dtype the loader coerces the column to.
        pretty_name: Human-readable name for plot labels and exported tables.
    """

    original_name: str
    dtype: str
    pretty_name: str


class BaseColumn(StrEnum):
    """Column enum whose members carry :class:`ColumnMetadata`.

    Subclasses provide the member-to-metadata table via :meth:`metadata_table`.
    """

    @classmethod
    def metadata_table(cls) -> Mapping[BaseColumn, ColumnMetadata]:
        raise NotImplementedError(f"{cls.__name__} must implement metadata_table()")

    def metadata(self) -> ColumnMetadata:
        return self.metadata_table()[self]

    @classmethod
    def measurement_columns(cls) -> list[str]:
        """Columns holding continuous measurements (float dtype), in declaration order."""
        return [col.value for col in cls if col.dtype_name.startswith("float")]

    @property
    def pretty_name(self) -> str:
        return self.metadata().pretty_name

    @property
    def original_name(self) -> str:
        return self.metadata().original_name

    @property
    def dtype_name(self) -> str:
        return self.metadata().dtype
