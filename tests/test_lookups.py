"""Tests for lookup resolution of coded ordinal fields."""

import pandas as pd
import pytest

from people_analytics.config import SATISFACTION_ORDER, LevelOrders
from people_analytics.domains.workforce.lookups import LookupTable, build_lookup, build_lookups
from people_analytics.utils.types import ConfigurationError, LookupMiss


@pytest.fixture
def satisfaction(lookup_frames) -> LookupTable:
    return build_lookup(
        "satisfaction", lookup_frames["satisfaction"], "satisfaction_id", "satisfaction_level", SATISFACTION_ORDER,
    )


class TestLookupTable:
    def test_resolves_known_code(self, satisfaction):
        assert satisfaction.resolve(1) == "Very Dissatisfied"
        assert satisfaction.resolve(5) == "Very Satisfied"

    def test_float_code_from_merged_column(self, satisfaction):
        assert satisfaction.resolve(3.0) == "Neutral"

    def test_unknown_code_raises(self, satisfaction):
        with pytest.raises(LookupMiss) as exc:
            satisfaction.resolve(9)
        assert exc.value.table == "satisfaction"
        assert exc.value.code == 9

    def test_fractional_code_is_a_miss(self, satisfaction):
        with pytest.raises(LookupMiss):
            satisfaction.resolve(2.5)

    def test_rank_follows_declared_order(self, satisfaction):
        assert satisfaction.rank("Very Dissatisfied") == 1
        assert satisfaction.rank("Very Satisfied") == 5

    def test_label_outside_order_rejected(self):
        with pytest.raises(ConfigurationError, match="missing from the declared order"):
            LookupTable("rating", {1: "Great"}, ("Poor", "Good"))


class TestResolveSeries:
    def test_unknown_and_missing_become_null(self, satisfaction):
        codes = pd.Series([1, 9, None, 4], name="job_satisfaction")
        labels = satisfaction.resolve_series(codes)
        assert labels.tolist()[0] == "Very Dissatisfied"
        assert pd.isna(labels.iloc[1])
        assert pd.isna(labels.iloc[2])
        assert labels.iloc[3] == "Satisfied"

    def test_preserves_index(self, satisfaction):
        codes = pd.Series([2, 3], index=[10, 20])
        assert satisfaction.resolve_series(codes).index.tolist() == [10, 20]


class TestBuildLookups:
    def test_builds_all_three(self, lookup_frames):
        tables = build_lookups(lookup_frames, LevelOrders())
        assert set(tables) == {"education", "satisfaction", "rating"}
        assert tables["education"].resolve(3) == "Bachelors"
        assert tables["rating"].resolve(4) == "Exceeds Expectation"

    def test_duplicate_codes_rejected(self, lookup_frames):
        frame = pd.concat([lookup_frames["rating"], lookup_frames["rating"].head(1)])
        with pytest.raises(ConfigurationError, match="duplicate codes"):
            build_lookup("rating", frame, "rating_id", "rating_level", LevelOrders().rating)

    def test_missing_columns_rejected(self, lookup_frames):
        frame = lookup_frames["education"].rename(columns={"education_level": "label"})
        with pytest.raises(ConfigurationError, match="missing columns"):
            build_lookup("education", frame, "education_level_id", "education_level", LevelOrders().education)

    def test_missing_table_rejected(self, lookup_frames):
        del lookup_frames["rating"]
        with pytest.raises(ConfigurationError, match="was not loaded"):
            build_lookups(lookup_frames, LevelOrders())

    def test_labels_are_stripped(self):
        frame = pd.DataFrame({"rating_id": [1, 2], "rating_level": [" Unacceptable ", "Needs Improvement"]})
        table = build_lookup("rating", frame, "rating_id", "rating_level", LevelOrders().rating)
        assert table.resolve(1) == "Unacceptable"
