"""Tests for type coercion and the assembled analytical dataset."""

import pandas as pd
import pytest

from people_analytics.config import EDUCATION_ORDER, RATING_ORDER
from people_analytics.domains.workforce.coercion import (
    coerce_ordinal,
    coerce_outcome,
    coerce_types,
    rank_projection,
)
from people_analytics.domains.workforce.models import combined_schema
from people_analytics.utils.types import ConfigurationError, FieldKind
from people_analytics.utils.validators import validate_dataframe


class TestCoerceOutcome:
    def test_two_levels_with_no_as_reference(self):
        outcome = coerce_outcome(pd.Series(["Yes", "No", "no", " YES "]))
        assert list(outcome.cat.categories) == ["No", "Yes"]
        assert outcome.tolist() == ["Yes", "No", "No", "Yes"]

    def test_unrecognized_values_are_missing(self):
        outcome = coerce_outcome(pd.Series(["Yes", "maybe", None]))
        assert outcome.isna().tolist() == [False, True, True]


class TestCoerceOrdinal:
    def test_education_order_is_declared_not_alphabetical(self):
        labels = pd.Series(["Masters", "High School", "Doctorate", "Bachelors"], name="education_level")
        ordered = coerce_ordinal(labels, list(EDUCATION_ORDER))
        assert ordered.cat.ordered
        assert list(ordered.cat.categories) == list(EDUCATION_ORDER)
        assert ordered.cat.codes.tolist() == [3, 1, 4, 2]

    def test_values_outside_order_become_missing(self):
        ordered = coerce_ordinal(pd.Series(["Meets Expectation", "Stellar"]), list(RATING_ORDER))
        assert ordered.isna().tolist() == [False, True]

    def test_integer_levels(self):
        ordered = coerce_ordinal(pd.Series([0.0, 3.0, None], name="stock_option_level"), [0, 1, 2, 3])
        assert ordered.iloc[0] == 0
        assert ordered.iloc[1] == 3
        assert pd.isna(ordered.iloc[2])

    def test_rank_projection_is_one_based_and_monotonic(self):
        ordered = coerce_ordinal(
            pd.Series(["Unacceptable", "Above and Beyond", None, "Meets Expectation"]), list(RATING_ORDER),
        )
        ranks = rank_projection(ordered)
        assert str(ranks.dtype) == "Int64"
        assert ranks.iloc[0] == 1
        assert ranks.iloc[1] == 5
        assert pd.isna(ranks.iloc[2])
        assert ranks.iloc[3] == 3


class TestCoerceTypes:
    def test_numeric_fields_become_numbers(self, orders):
        frame = pd.DataFrame({"employee_id": ["E1", "E2"], "salary": ["50000", "oops"]})
        typed = coerce_types(frame, orders)
        assert typed["salary"].iloc[0] == 50000
        assert pd.isna(typed["salary"].iloc[1])

    def test_nominal_fields_become_categories(self, orders):
        frame = pd.DataFrame({"employee_id": ["E1", "E2"], "department": ["Sales ", "Technology"]})
        typed = coerce_types(frame, orders)
        assert isinstance(typed["department"].dtype, pd.CategoricalDtype)
        assert set(typed["department"].cat.categories) == {"Sales", "Technology"}

    def test_does_not_modify_input(self, orders):
        frame = pd.DataFrame({"employee_id": ["E1"], "attrition": ["Yes"]})
        coerce_types(frame, orders)
        assert not isinstance(frame["attrition"].dtype, pd.CategoricalDtype)


class TestAnalyticalDataset:
    def test_one_row_per_employee(self, dataset, employees, reviews):
        assert dataset.employee_count == len(employees)
        assert dataset.reviewed_count == reviews["employee_id"].nunique()
        assert dataset.frame["employee_id"].is_unique

    def test_semantic_types(self, dataset):
        frame = dataset.frame
        assert list(frame["attrition"].cat.categories) == ["No", "Yes"]
        assert frame["education_level"].cat.ordered
        assert list(frame["education_level"].cat.categories) == list(EDUCATION_ORDER)
        assert frame["work_life_balance_level"].cat.ordered
        assert list(frame["stock_option_level"].cat.categories) == [0, 1, 2, 3]

    def test_rank_agrees_with_label_order(self, dataset):
        frame = dataset.frame.dropna(subset=["manager_rating_level"])
        expected = frame["manager_rating_level"].map(lambda label: RATING_ORDER.index(label) + 1)
        assert (frame["manager_rating_rank"].astype(int) == expected.astype(int)).all()

    def test_typed_frame_matches_combined_schema(self, dataset):
        assert validate_dataframe(dataset.frame, combined_schema)["valid"]

    def test_field_kinds(self, dataset):
        assert dataset.kind_of("salary") is FieldKind.NUMERIC
        assert dataset.kind_of("job_satisfaction_level") is FieldKind.ORDINAL
        assert dataset.kind_of("job_satisfaction_rank") is FieldKind.NUMERIC
        assert dataset.kind_of("job_satisfaction") is FieldKind.CODE
        assert dataset.kind_of("attrition") is FieldKind.BINARY
        with pytest.raises(ConfigurationError):
            dataset.kind_of("favourite_colour")

    def test_select_returns_copy(self, dataset):
        selected = dataset.select(["salary"])
        selected["salary"] = 0
        assert (dataset.frame["salary"] != 0).any()

    def test_select_unknown_column(self, dataset):
        with pytest.raises(ConfigurationError, match="not present"):
            dataset.select(["salary", "bonus"])
