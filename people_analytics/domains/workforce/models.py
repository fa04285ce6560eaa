"""Pandera schemas and the field registry for workforce data."""

from dataclasses import dataclass

from pandera.pandas import Check, Column, DataFrameSchema

from people_analytics.utils.types import FieldKind, FieldName


@dataclass(frozen=True)
class OrdinalField:
    code_column: FieldName
    label_column: FieldName
    rank_column: FieldName
    lookup: str | None
    source: str  # "employee" | "review"


ORDINAL_FIELDS: tuple[OrdinalField, ...] = (
    OrdinalField("education", "education_level", "education_rank", "education", "employee"),
    OrdinalField("stock_option_level", "stock_option_level", "stock_option_rank", None, "employee"),
    OrdinalField(
        "environment_satisfaction",
        "environment_satisfaction_level",
        "environment_satisfaction_rank",
        "satisfaction",
        "review",
    ),
    OrdinalField(
        "job_satisfaction", "job_satisfaction_level", "job_satisfaction_rank", "satisfaction", "review",
    ),
    OrdinalField(
        "relationship_satisfaction",
        "relationship_satisfaction_level",
        "relationship_satisfaction_rank",
        "satisfaction",
        "review",
    ),
    OrdinalField(
        "work_life_balance", "work_life_balance_level", "work_life_balance_rank", "satisfaction", "review",
    ),
    OrdinalField("self_rating", "self_rating_level", "self_rating_rank", "rating", "review"),
    OrdinalField("manager_rating", "manager_rating_level", "manager_rating_rank", "rating", "review"),
)

NOMINAL_FIELDS: tuple[FieldName, ...] = (
    "gender",
    "business_travel",
    "department",
    "state",
    "ethnicity",
    "education_field",
    "job_role",
    "marital_status",
    "over_time",
)

NUMERIC_FIELDS: tuple[FieldName, ...] = (
    "age",
    "salary",
    "distance_from_home_km",
    "years_at_company",
    "years_in_most_recent_role",
    "years_since_last_promotion",
    "years_with_curr_manager",
    "training_opportunities_within_year",
    "training_opportunities_taken",
)

OUTCOME_FIELD: FieldName = "attrition"
OUTCOME_LEVELS: tuple[str, str] = ("No", "Yes")


def _build_field_kinds() -> dict[FieldName, FieldKind]:
    kinds: dict[FieldName, FieldKind] = {
        "employee_id": FieldKind.IDENTIFIER,
        "performance_id": FieldKind.IDENTIFIER,
        "first_name": FieldKind.TEXT,
        "last_name": FieldKind.TEXT,
        "hire_date": FieldKind.DATE,
        "review_date": FieldKind.DATE,
        OUTCOME_FIELD: FieldKind.BINARY,
    }
    kinds.update({name: FieldKind.NOMINAL for name in NOMINAL_FIELDS})
    kinds.update({name: FieldKind.NUMERIC for name in NUMERIC_FIELDS})
    for ordinal in ORDINAL_FIELDS:
        if ordinal.code_column != ordinal.label_column:
            kinds[ordinal.code_column] = FieldKind.CODE
        kinds[ordinal.label_column] = FieldKind.ORDINAL
        kinds[ordinal.rank_column] = FieldKind.NUMERIC
    return kinds


# Static registry of every field the analytical dataset may carry
FIELD_KINDS: dict[FieldName, FieldKind] = _build_field_kinds()

REVIEW_DERIVED_FIELDS: tuple[FieldName, ...] = (
    "performance_id",
    "review_date",
    "environment_satisfaction",
    "job_satisfaction",
    "relationship_satisfaction",
    "training_opportunities_within_year",
    "training_opportunities_taken",
    "work_life_balance",
    "self_rating",
    "manager_rating",
)


employee_schema = DataFrameSchema(
    {
        "employee_id": Column(str, nullable=False, unique=True),
        "gender": Column(str, nullable=True),
        "age": Column(float, Check.in_range(16, 100), nullable=True),
        "business_travel": Column(str, nullable=True),
        "department": Column(str, nullable=True),
        "distance_from_home_km": Column(float, Check.greater_than_or_equal_to(0), nullable=True),
        "education": Column(float, Check.in_range(1, 5), nullable=True),
        "job_role": Column(str, nullable=True),
        "marital_status": Column(str, nullable=True),
        "salary": Column(float, Check.greater_than_or_equal_to(0), nullable=True),
        "stock_option_level": Column(float, Check.isin([0, 1, 2, 3]), nullable=True),
        "over_time": Column(str, nullable=True),
        "hire_date": Column("datetime64[ns]", nullable=True),
        "attrition": Column(nullable=False),
    },
    strict=False,
    coerce=True,
)


performance_schema = DataFrameSchema(
    {
        "performance_id": Column(str, nullable=True),
        "employee_id": Column(str, nullable=False),
        "review_date": Column("datetime64[ns]", nullable=True),
        "environment_satisfaction": Column(float, Check.in_range(1, 5), nullable=True),
        "job_satisfaction": Column(float, Check.in_range(1, 5), nullable=True),
        "relationship_satisfaction": Column(float, Check.in_range(1, 5), nullable=True),
        "work_life_balance": Column(float, Check.in_range(1, 5), nullable=True),
        "self_rating": Column(float, Check.in_range(1, 5), nullable=True),
        "manager_rating": Column(float, Check.in_range(1, 5), nullable=True),
        "training_opportunities_taken": Column(
            float, Check.greater_than_or_equal_to(0), nullable=True,
        ),
    },
    strict=False,
    coerce=True,
)


def lookup_schema(code_column: str, label_column: str) -> DataFrameSchema:
    """Schema for a (code, label) lookup table."""
    return DataFrameSchema(
        {
            code_column: Column(int, nullable=False, unique=True),
            label_column: Column(str, Check.str_length(min_value=1), nullable=False),
        },
        strict=False,
        coerce=True,
    )


combined_schema = DataFrameSchema(
    {
        "employee_id": Column(nullable=False, unique=True),
        OUTCOME_FIELD: Column("category", Check.isin(list(OUTCOME_LEVELS)), nullable=True),
        **{
            ordinal.rank_column: Column(
                "Int64", Check.greater_than_or_equal_to(1), nullable=True, required=False,
            )
            for ordinal in ORDINAL_FIELDS
        },
    },
    strict=False,
)
