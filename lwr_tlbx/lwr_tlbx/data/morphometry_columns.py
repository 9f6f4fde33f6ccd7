"""Column definitions for the morphometric measurement spreadsheets."""

from .base_columns import BaseColumn, ColumnMetadata


class MorphometryColumn(BaseColumn):
    """Column names of the fish morphometry spreadsheets.

    Columns:
    - ``T_Length``: float - Total length of the fish
    - ``S_Length``: float - Standard length of the fish
    - ``Weight``: float - Body weight
    - ``Sex``: int - Sex code; ``9`` marks an undefined sex
    """

    T_LENGTH = "T_Length"
    """Total length (response of the length-length relationship)."""
    S_LENGTH = "S_Length"
    """Standard length (predictor of both relationships)."""
    WEIGHT = "Weight"
    """Body weight (response of the length-weight relationship)."""
    SEX = "Sex"
    """Integer sex code; ``9`` is reserved for undefined sex."""

    @classmethod
    def metadata_table(cls) -> dict["MorphometryColumn", ColumnMetadata]:
        return _COLUMN_METADATA_MORPHOMETRY


_COLUMN_METADATA_MORPHOMETRY: dict[MorphometryColumn, ColumnMetadata] = {
    MorphometryColumn.T_LENGTH: ColumnMetadata(
        original_name="T_Length",
        dtype="float64",
        pretty_name="Total Length",
    ),
    MorphometryColumn.S_LENGTH: ColumnMetadata(
        original_name="S_Length",
        dtype="float64",
        pretty_name="Standard Length",
    ),
    MorphometryColumn.WEIGHT: ColumnMetadata(
        original_name="Weight",
        dtype="float64",
        pretty_name="Weight",
    ),
    MorphometryColumn.SEX: ColumnMetadata(
        original_name="Sex",
        dtype="int64",
        pretty_name="Sex",
    ),
}
