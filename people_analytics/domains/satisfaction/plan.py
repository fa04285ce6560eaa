"""Declared satisfaction analyses: job satisfaction drivers and group differences."""

from people_analytics.stats.specs import AnovaSpec, ModelSpec

SATISFACTION_MODEL = ModelSpec(
    name="job satisfaction drivers",
    outcome="job_satisfaction_level",
    predictors=(
        "salary",
        "over_time",
        "business_travel",
        "department",
        "years_since_last_promotion",
        "work_life_balance_level",
        "manager_rating_level",
        "distance_from_home_km",
    ),
)

SATISFACTION_ANOVAS: tuple[AnovaSpec, ...] = (
    AnovaSpec("job satisfaction by department", "job_satisfaction_rank", "department"),
    AnovaSpec("job satisfaction by job role", "job_satisfaction_rank", "job_role"),
    AnovaSpec("environment satisfaction by job role", "environment_satisfaction_rank", "job_role"),
    AnovaSpec("work-life balance by overtime", "work_life_balance_rank", "over_time"),
    AnovaSpec("work-life balance by business travel", "work_life_balance_rank", "business_travel"),
)

SATISFACTION_CORRELATION_FIELDS: tuple[str, ...] = (
    "job_satisfaction_rank",
    "environment_satisfaction_rank",
    "relationship_satisfaction_rank",
    "work_life_balance_rank",
    "salary",
    "age",
    "years_at_company",
    "distance_from_home_km",
)
