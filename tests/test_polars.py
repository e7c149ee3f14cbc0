"""Tests for the Polars helpers in docsim.polars_ext."""

import polars as pl
import pytest
from fixtures.documents import SHORT_DOCUMENTS, SOURCE_TEXT

import docsim as ds


class TestCompareSeries:
    """Tests for compare_series."""

    def test_basic(self):
        refs = pl.Series(["The quick brown fox jumps", "A completely different text", "The quick brown fox"])
        result = ds.compare_series("The quick brown fox", refs, threshold=50.0)

        assert result.columns == ["reference_index", "reference", "similarity"]
        assert result["reference_index"].to_list() == [2, 0]
        assert result["reference"].to_list() == ["The quick brown fox", "The quick brown fox jumps"]
        assert result["similarity"][0] == 100.0

    def test_schema(self):
        result = ds.compare_series("abc", pl.Series(["abc"]))
        assert result.schema == {
            "reference_index": pl.UInt32,
            "reference": pl.Utf8,
            "similarity": pl.Float64,
        }

    def test_empty_result_keeps_schema(self):
        result = ds.compare_series("abc", pl.Series(["completely unrelated words"]), threshold=90.0)
        assert result.height == 0
        assert result.columns == ["reference_index", "reference", "similarity"]

    def test_nulls_skipped_positions_kept(self):
        refs = pl.Series([None, "hello world", None, "hello world"])
        result = ds.compare_series("hello world", refs, method="jaccard", threshold=50.0)
        assert result["reference_index"].to_list() == [1, 3]

    def test_matches_compare(self):
        refs = pl.Series(SHORT_DOCUMENTS)
        result = ds.compare_series(SOURCE_TEXT, refs, method="ngram", threshold=20.0)
        expected = ds.compare(SOURCE_TEXT, SHORT_DOCUMENTS, method="ngram", threshold=20.0)
        assert sorted(result["reference_index"].to_list()) == [m.reference_index for m in expected]

    def test_sorted_by_similarity_descending(self):
        refs = pl.Series(SHORT_DOCUMENTS)
        result = ds.compare_series(SOURCE_TEXT, refs, method="levenshtein", threshold=10.0)
        scores = result["similarity"].to_list()
        assert scores == sorted(scores, reverse=True)


class TestCompareDataframe:
    """Tests for compare_dataframe."""

    def test_adds_similarity_column(self):
        df = pl.DataFrame({
            "doc_id": [10, 11, 12],
            "body": ["The quick brown fox jumps", "A completely different text", "The quick brown fox"],
        })
        result = ds.compare_dataframe(df, "body", "The quick brown fox", threshold=50.0)

        assert result.columns == ["doc_id", "body", "similarity"]
        assert result["similarity"].dtype == pl.Float64
        similarity = result["similarity"].to_list()
        assert similarity[1] is None
        assert similarity[2] == 100.0
        assert similarity[0] >= 50.0

    def test_filter_matches(self):
        df = pl.DataFrame({"body": SHORT_DOCUMENTS})
        result = ds.compare_dataframe(df, "body", SOURCE_TEXT, method="jaccard", threshold=60.0)
        matched = result.filter(pl.col("similarity").is_not_null())
        expected = ds.compare(SOURCE_TEXT, SHORT_DOCUMENTS, method="jaccard", threshold=60.0)
        assert matched.height == len(expected)

    def test_null_rows(self):
        df = pl.DataFrame({"body": ["abc", None]})
        result = ds.compare_dataframe(df, "body", "abc", method="levenshtein", threshold=0.0)
        assert result["similarity"].to_list() == [100.0, None]

    def test_missing_column(self):
        df = pl.DataFrame({"body": ["abc"]})
        with pytest.raises(ValueError, match="not found"):
            ds.compare_dataframe(df, "text", "abc")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
