"""Performance domain: what drives manager ratings and where they differ."""

from functools import partial

from people_analytics.config import AnalysisConfig
from people_analytics.domains.performance.plan import (
    RATING_ANOVAS,
    RATING_CORRELATION_FIELDS,
    RATING_MODEL,
)
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats import correlate, fit_ordinal, run_anova
from people_analytics.stats.runner import AnalysisStep, check_required_fields, run_steps
from people_analytics.utils.types import AnalysisResult


def validate(dataset: AnalyticalDataset) -> dict[str, str | int]:
    """Validate that rating fields are available."""
    return check_required_fields(dataset, (RATING_MODEL.outcome, "manager_rating_rank", "self_rating_level"))


def plan(dataset: AnalyticalDataset, config: AnalysisConfig) -> list[AnalysisStep]:
    settings = config.stats
    steps: list[AnalysisStep] = [
        (RATING_MODEL.name, "ordinal_regression", partial(fit_ordinal, dataset, RATING_MODEL, settings)),
    ]
    steps += [
        (spec.name, "anova", partial(run_anova, dataset, spec, settings))
        for spec in RATING_ANOVAS
    ]
    steps.append(
        (
            "rating correlations",
            "correlation",
            partial(correlate, dataset, "rating correlations", RATING_CORRELATION_FIELDS, "spearman", settings),
        )
    )
    return steps


def run(dataset: AnalyticalDataset, config: AnalysisConfig) -> list[AnalysisResult]:
    """Execute every performance analysis."""
    return run_steps(plan(dataset, config))
