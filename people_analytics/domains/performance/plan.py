"""Declared performance analyses: manager rating drivers and rating differences."""

from people_analytics.stats.specs import AnovaSpec, ModelSpec

RATING_MODEL = ModelSpec(
    name="manager rating drivers",
    outcome="manager_rating_level",
    predictors=(
        "self_rating_level",
        "training_opportunities_taken",
        "job_satisfaction_level",
        "years_at_company",
        "years_since_last_promotion",
        "over_time",
        "department",
        "salary",
        "age",
    ),
)

RATING_ANOVAS: tuple[AnovaSpec, ...] = (
    AnovaSpec("manager rating by department", "manager_rating_rank", "department"),
    AnovaSpec("manager rating by job role", "manager_rating_rank", "job_role"),
    AnovaSpec("manager rating by education", "manager_rating_rank", "education_level"),
    AnovaSpec("manager rating by overtime", "manager_rating_rank", "over_time"),
)

RATING_CORRELATION_FIELDS: tuple[str, ...] = (
    "self_rating_rank",
    "manager_rating_rank",
    "training_opportunities_taken",
    "years_since_last_promotion",
    "salary",
)
