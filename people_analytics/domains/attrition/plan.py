"""Declared attrition analyses: group comparisons, associations and the logistic model."""

from people_analytics.stats.specs import ComparisonSpec, ModelSpec

OUTCOME = "attrition"

NUMERIC_COMPARISONS: tuple[ComparisonSpec, ...] = tuple(
    ComparisonSpec(f"{measure} by {OUTCOME}", OUTCOME, measure)
    for measure in (
        "age",
        "salary",
        "distance_from_home_km",
        "years_at_company",
        "years_in_most_recent_role",
        "years_since_last_promotion",
        "years_with_curr_manager",
        "training_opportunities_taken",
        "job_satisfaction_rank",
        "environment_satisfaction_rank",
        "relationship_satisfaction_rank",
        "work_life_balance_rank",
        "manager_rating_rank",
    )
)

ASSOCIATIONS: tuple[ComparisonSpec, ...] = tuple(
    ComparisonSpec(f"{factor} vs {OUTCOME}", OUTCOME, factor)
    for factor in (
        "gender",
        "business_travel",
        "department",
        "job_role",
        "marital_status",
        "over_time",
        "education_level",
        "education_field",
        "ethnicity",
        "stock_option_level",
        "job_satisfaction_level",
        "environment_satisfaction_level",
        "work_life_balance_level",
    )
)

PROFILE_FIELDS: tuple[str, ...] = tuple(spec.field for spec in NUMERIC_COMPARISONS)

RATE_BREAKDOWNS: tuple[str, ...] = ("department", "job_role", "over_time", "business_travel")

ATTRITION_MODEL = ModelSpec(
    name="attrition drivers",
    outcome=OUTCOME,
    predictors=(
        "age",
        "salary",
        "over_time",
        "business_travel",
        "marital_status",
        "distance_from_home_km",
        "years_at_company",
        "years_since_last_promotion",
        "stock_option_level",
        "job_satisfaction_level",
        "environment_satisfaction_level",
        "work_life_balance_level",
    ),
)
