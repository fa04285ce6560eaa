"""Satisfaction domain: drivers of job satisfaction and how it varies across the workforce."""

from functools import partial

from people_analytics.config import AnalysisConfig
from people_analytics.domains.satisfaction.plan import (
    SATISFACTION_ANOVAS,
    SATISFACTION_CORRELATION_FIELDS,
    SATISFACTION_MODEL,
)
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats import correlate, fit_ordinal, run_anova
from people_analytics.stats.runner import AnalysisStep, check_required_fields, run_steps
from people_analytics.utils.types import AnalysisResult


def validate(dataset: AnalyticalDataset) -> dict[str, str | int]:
    """Validate that satisfaction fields are available."""
    return check_required_fields(
        dataset, (SATISFACTION_MODEL.outcome, "job_satisfaction_rank", "work_life_balance_rank"),
    )


def plan(dataset: AnalyticalDataset, config: AnalysisConfig) -> list[AnalysisStep]:
    settings = config.stats
    steps: list[AnalysisStep] = [
        (
            SATISFACTION_MODEL.name,
            "ordinal_regression",
            partial(fit_ordinal, dataset, SATISFACTION_MODEL, settings),
        ),
    ]
    steps += [
        (spec.name, "anova", partial(run_anova, dataset, spec, settings))
        for spec in SATISFACTION_ANOVAS
    ]
    steps.append(
        (
            "satisfaction correlations",
            "correlation",
            partial(
                correlate, dataset, "satisfaction correlations", SATISFACTION_CORRELATION_FIELDS,
                "spearman", settings,
            ),
        )
    )
    return steps


def run(dataset: AnalyticalDataset, config: AnalysisConfig) -> list[AnalysisResult]:
    """Execute every satisfaction analysis."""
    return run_steps(plan(dataset, config))
