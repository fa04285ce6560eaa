"""Attrition domain: who leaves, and which factors move the odds of leaving."""

from functools import partial

from people_analytics.config import AnalysisConfig
from people_analytics.domains.attrition.plan import (
    ASSOCIATIONS,
    ATTRITION_MODEL,
    NUMERIC_COMPARISONS,
    OUTCOME,
    PROFILE_FIELDS,
    RATE_BREAKDOWNS,
)
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats import (
    assess_association,
    attrition_rate_by,
    compare_numeric,
    fit_logistic,
    summarize_numeric,
)
from people_analytics.stats.runner import AnalysisStep, check_required_fields, run_steps
from people_analytics.utils.types import AnalysisResult


def validate(dataset: AnalyticalDataset) -> dict[str, str | int]:
    """Validate that the attrition outcome and model inputs are available."""
    return check_required_fields(dataset, (OUTCOME, *ATTRITION_MODEL.predictors))


def plan(dataset: AnalyticalDataset, config: AnalysisConfig) -> list[AnalysisStep]:
    settings = config.stats
    steps: list[AnalysisStep] = [
        ("numeric profile", "descriptive", partial(summarize_numeric, dataset, PROFILE_FIELDS)),
    ]
    steps += [
        (f"{OUTCOME} rate by {factor}", "descriptive", partial(attrition_rate_by, dataset, factor, OUTCOME))
        for factor in RATE_BREAKDOWNS
    ]
    steps += [
        (spec.name, "numeric_comparison", partial(compare_numeric, dataset, spec.outcome, spec.field, settings))
        for spec in NUMERIC_COMPARISONS
    ]
    steps += [
        (spec.name, "association", partial(assess_association, dataset, spec.outcome, spec.field, settings))
        for spec in ASSOCIATIONS
    ]
    steps.append(
        (ATTRITION_MODEL.name, "logistic_regression", partial(fit_logistic, dataset, ATTRITION_MODEL, settings))
    )
    return steps


def run(dataset: AnalyticalDataset, config: AnalysisConfig) -> list[AnalysisResult]:
    """Execute every attrition analysis."""
    return run_steps(plan(dataset, config))
