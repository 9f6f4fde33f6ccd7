"""Tests for loading and validating morphometry spreadsheets."""

import numpy as np
import pandas as pd
import pytest

from lwr_tlbx.data import MCol, MorphometryDataset, RelationshipKind
from lwr_tlbx.data.views import DatasetView
from lwr_tlbx.errors import DataParseError


class TestColumnDefinitions:
    """Test the column enum and its metadata."""

    def test_column_values_match_spreadsheet_headers(self) -> None:
        assert [c.value for c in MCol] == ["T_Length", "S_Length", "Weight", "Sex"]
        for col in MCol:
            assert col.original_name == col.value

    def test_measurement_columns_exclude_sex(self) -> None:
        assert MCol.measurement_columns() == ["T_Length", "S_Length", "Weight"]

    def test_pretty_names_and_dtypes(self) -> None:
        assert MCol.S_LENGTH.pretty_name == "Standard Length"
        assert MCol.T_LENGTH.pretty_name == "Total Length"
        assert MCol.SEX.dtype_name == "int64"


class TestRelationshipKind:
    """Test the relationship definitions."""

    def test_required_columns(self) -> None:
        assert RelationshipKind.LWR.required_columns == ["Weight", "S_Length", "Sex"]
        assert RelationshipKind.LLR.required_columns == ["T_Length", "S_Length", "Sex"]

    def test_model_terms(self) -> None:
        assert RelationshipKind.LWR.response_term == "log10_Weight"
        assert RelationshipKind.LWR.predictor_term == "log10_S_Length"
        assert RelationshipKind.LLR.response_term == "T_Length"
        assert RelationshipKind.LLR.predictor_term == "S_Length"

    def test_model_frame_does_not_mutate_input(self, isometric_lwr_df: pd.DataFrame) -> None:
        before = isometric_lwr_df.copy()
        frame = RelationshipKind.LWR.model_frame(isometric_lwr_df)

        pd.testing.assert_frame_equal(isometric_lwr_df, before)
        np.testing.assert_allclose(frame["log10_Weight"], np.log10(isometric_lwr_df["Weight"]))
        np.testing.assert_allclose(frame["log10_S_Length"], np.log10(isometric_lwr_df["S_Length"]))


class TestMorphometryDatasetLoading:
    """Test reading spreadsheets into a MorphometryDataset."""

    def test_from_excel_keeps_required_columns(self, write_xlsx, isometric_lwr_df: pd.DataFrame) -> None:
        """Extra columns are dropped and header whitespace is stripped."""
        raw = isometric_lwr_df.rename(columns={"Weight": " Weight "}).assign(Station="A1")
        ds = MorphometryDataset.from_excel(write_xlsx(raw), RelationshipKind.LWR)

        assert list(ds.df.columns) == ["Weight", "S_Length", "Sex"]
        assert len(ds) == 50
        assert ds.kind is RelationshipKind.LWR
        assert ds.df["Weight"].dtype == "float64"
        assert ds.df["Sex"].dtype == "int64"

    def test_rows_with_missing_values_are_dropped(self, write_xlsx, isometric_lwr_df: pd.DataFrame) -> None:
        raw = isometric_lwr_df.astype({"Sex": "float64"})
        raw.loc[3, "Weight"] = np.nan
        raw.loc[7, "Sex"] = np.nan
        ds = MorphometryDataset.from_excel(write_xlsx(raw), RelationshipKind.LWR)

        assert len(ds) == 48
        assert ds.df.index.equals(pd.RangeIndex(48))
        assert ds.df["Sex"].dtype == "int64"

    def test_llr_does_not_need_weight(self, write_xlsx, llr_df: pd.DataFrame) -> None:
        ds = MorphometryDataset.from_excel(write_xlsx(llr_df), RelationshipKind.LLR)
        assert list(ds.df.columns) == ["T_Length", "S_Length", "Sex"]
        assert len(ds) == len(llr_df)

    def test_csv_is_read_by_suffix(self, tmp_path, llr_df: pd.DataFrame) -> None:
        path = tmp_path / "measurements.csv"
        llr_df.to_csv(path, index=False)
        ds = MorphometryDataset.from_excel(path, RelationshipKind.LLR)
        assert len(ds) == len(llr_df)

    def test_missing_column_raises(self, write_xlsx, isometric_lwr_df: pd.DataFrame) -> None:
        path = write_xlsx(isometric_lwr_df.drop(columns="S_Length"))
        with pytest.raises(DataParseError, match="S_Length"):
            MorphometryDataset.from_excel(path, RelationshipKind.LWR)

    def test_non_numeric_measurement_raises(self, write_xlsx, isometric_lwr_df: pd.DataFrame) -> None:
        raw = isometric_lwr_df.astype({"Weight": object})
        raw.loc[0, "Weight"] = "heavy"
        with pytest.raises(DataParseError):
            MorphometryDataset.from_excel(write_xlsx(raw), RelationshipKind.LWR)

    def test_fractional_sex_code_raises(self, write_xlsx, isometric_lwr_df: pd.DataFrame) -> None:
        raw = isometric_lwr_df.astype({"Sex": "float64"})
        raw.loc[0, "Sex"] = 1.5
        with pytest.raises(DataParseError, match="Sex"):
            MorphometryDataset.from_excel(write_xlsx(raw), RelationshipKind.LWR)

    def test_unreadable_file_raises(self, tmp_path) -> None:
        path = tmp_path / "broken.xlsx"
        path.write_text("this is not a workbook")
        with pytest.raises(DataParseError):
            MorphometryDataset.from_excel(path, RelationshipKind.LWR)

    def test_legacy_xls_is_rejected(self, tmp_path) -> None:
        """An OLE2 workbook is reported as a parse error, never handed to another reader."""
        path = tmp_path / "bad.xls"
        path.write_bytes(bytes.fromhex("d0cf11e0a1b11ae1") + bytes(504))
        with pytest.raises(DataParseError, match="Unsupported file type"):
            MorphometryDataset.from_excel(path, RelationshipKind.LWR)

    def test_file_without_suffix_is_rejected(self, tmp_path, isometric_lwr_df: pd.DataFrame) -> None:
        path = tmp_path / "download"
        isometric_lwr_df.to_csv(path, index=False)
        with pytest.raises(DataParseError):
            MorphometryDataset.from_excel(path, RelationshipKind.LWR)

    def test_parse_error_is_a_value_error(self) -> None:
        assert issubclass(DataParseError, ValueError)

    def test_df_before_loading_raises(self) -> None:
        with pytest.raises(ValueError, match="not loaded"):
            _ = MorphometryDataset().df


class TestDatasetView:
    """Test views built from a loaded dataset."""

    def test_view_attaches_model_terms(self, isometric_lwr_df: pd.DataFrame) -> None:
        ds = MorphometryDataset(isometric_lwr_df, RelationshipKind.LWR)
        view = ds.view()

        assert isinstance(view, DatasetView)
        assert view.n_obs == 50
        assert view.response.name == "log10_Weight"
        assert view.predictor.name == "log10_S_Length"
        assert "log10_Weight" not in ds.df.columns

    def test_view_pretty_names(self, isometric_lwr_df: pd.DataFrame) -> None:
        view = MorphometryDataset(isometric_lwr_df, RelationshipKind.LWR).view()
        assert view.pretty_by_col["S_Length"] == "Standard Length"
        assert view.pretty_by_col["log10_S_Length"] == "log10(Standard Length)"

    def test_view_of_subset(self, llr_df: pd.DataFrame) -> None:
        ds = MorphometryDataset(llr_df, RelationshipKind.LLR)
        view = ds.view(df=llr_df.iloc[:10])
        assert view.n_obs == 10

    def test_view_is_frozen(self, llr_df: pd.DataFrame) -> None:
        view = MorphometryDataset(llr_df, RelationshipKind.LLR).view()
        with pytest.raises(AttributeError):
            view.sex_col = "Gender"  # type: ignore[misc]

    def test_view_without_kind_raises(self, llr_df: pd.DataFrame) -> None:
        with pytest.raises(ValueError, match="relationship kind"):
            MorphometryDataset(llr_df).view()

    def test_get_pretty_name_fallback(self, llr_df: pd.DataFrame) -> None:
        ds = MorphometryDataset(llr_df, RelationshipKind.LLR)
        assert ds.get_pretty_name("T_Length") == "Total Length"
        assert ds.get_pretty_name("fork_length") == "Fork Length"
