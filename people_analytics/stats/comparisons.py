"""Two-group numeric comparisons and categorical association tests."""

import logging
import math

import numpy as np
import pandas as pd
from scipy import stats

from people_analytics.config import StatsSettings
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats.interpret import significance_statement
from people_analytics.stats.specs import CATEGORICAL_KINDS, check_field
from people_analytics.utils.types import (
    AnalysisResult,
    ConfigurationError,
    FieldKind,
    FieldName,
    failed,
    skipped,
    succeeded,
)

logger = logging.getLogger(__name__)

# Relative tolerance so simulated statistics tied with the observed one count as exceeding it
_ALMOST_ONE = 1 - 64 * np.finfo(float).eps


def _outcome_levels(frame: pd.DataFrame, outcome: FieldName) -> list:
    series = frame[outcome]
    if isinstance(series.dtype, pd.CategoricalDtype):
        levels = list(series.cat.categories)
    else:
        levels = sorted(series.dropna().unique())
    if len(levels) != 2:
        raise ConfigurationError(f"Outcome '{outcome}' must have exactly 2 levels, found {levels}")
    return levels


def _welch(a: np.ndarray, b: np.ndarray) -> tuple[str, float, float] | None:
    if len(a) < 2 or len(b) < 2:
        return None
    with np.errstate(divide="ignore", invalid="ignore"):
        result = stats.ttest_ind(a, b, equal_var=False)
    if not (math.isfinite(result.statistic) and math.isfinite(result.pvalue)):
        return None
    return "Welch two-sample t-test", float(result.statistic), float(result.pvalue)


def _rank_sum(a: np.ndarray, b: np.ndarray) -> tuple[str, float, float] | None:
    if len(a) < 1 or len(b) < 1:
        return None
    try:
        result = stats.mannwhitneyu(a, b, alternative="two-sided")
    except ValueError as exc:
        logger.debug("Rank-sum test failed: %s", exc)
        return None
    if not math.isfinite(result.pvalue):
        return None
    return "Wilcoxon rank-sum test", float(result.statistic), float(result.pvalue)


def compare_numeric(
    dataset: AnalyticalDataset,
    outcome: FieldName,
    measure: FieldName,
    settings: StatsSettings = StatsSettings(),
) -> AnalysisResult:
    """Compare ``measure`` between the two outcome groups.

    Welch's t-test first, then the Wilcoxon rank-sum test when the t-test
    cannot be computed. Only rows where both fields are present are used.
    """
    name = f"{measure} by {outcome}"
    kind = "numeric_comparison"
    check_field(outcome, {FieldKind.BINARY}, "outcome")
    check_field(measure, {FieldKind.NUMERIC}, "measure")

    frame = dataset.select([outcome, measure]).dropna()
    levels = _outcome_levels(frame, outcome)
    groups = {level: frame.loc[frame[outcome] == level, measure].astype(float).to_numpy() for level in levels}

    summary = pd.DataFrame(
        [
            {
                outcome: level,
                "n": len(values),
                "mean": float(np.mean(values)) if len(values) else np.nan,
            }
            for level, values in groups.items()
        ]
    )
    headline = f"Comparison of {measure} between {outcome} groups"
    a, b = groups[levels[0]], groups[levels[1]]

    outcome_of_test = _welch(a, b) or _rank_sum(a, b)
    if outcome_of_test is None:
        counts = ", ".join(f"{lvl}: {len(v)}" for lvl, v in groups.items())
        return skipped(name, kind, headline, f"could not test ({counts} valid observations)")

    method, statistic, p_value = outcome_of_test
    notes = []
    if method.startswith("Wilcoxon"):
        notes.append("Welch t-test could not be computed; fell back to the rank-sum test")

    return succeeded(
        name,
        kind,
        f"{headline} ({method})",
        table=summary,
        statistics={
            "method": method,
            "statistic": statistic,
            "p_value": p_value,
            "n": int(len(frame)),
            "interpretation": significance_statement(
                p_value, settings.alpha, f"difference in {measure} between {outcome} groups",
            ),
        },
        notes=notes,
    )


def _simulated_p_value(
    observed: np.ndarray,
    expected: np.ndarray,
    statistic: float,
    n_simulations: int,
    seed: int,
) -> float:
    """Monte Carlo p-value over random tables sharing the observed margins."""
    rng = np.random.default_rng(seed)
    distribution = stats.random_table(observed.sum(axis=1), observed.sum(axis=0))
    tables = distribution.rvs(size=n_simulations, random_state=rng)
    simulated = ((tables - expected) ** 2 / expected).sum(axis=(1, 2))
    exceed = int(np.sum(simulated >= statistic * _ALMOST_ONE))
    return (1 + exceed) / (n_simulations + 1)


def assess_association(
    dataset: AnalyticalDataset,
    outcome: FieldName,
    factor: FieldName,
    settings: StatsSettings = StatsSettings(),
) -> AnalysisResult:
    """Chi-squared test of ``factor`` x ``outcome`` with a simulated p-value."""
    name = f"{factor} vs {outcome}"
    kind = "association"
    headline = f"Association between {factor} and {outcome} (chi-squared, simulated p-value)"
    check_field(outcome, {FieldKind.BINARY}, "outcome")
    check_field(factor, CATEGORICAL_KINDS, "factor")

    frame = dataset.select([factor, outcome]).dropna()
    table = pd.crosstab(frame[factor], frame[outcome])
    table = table.loc[table.sum(axis=1) > 0, table.sum(axis=0) > 0]
    if table.shape[0] < 2 or table.shape[1] < 2:
        return skipped(
            name, kind, headline,
            f"invalid table: {table.shape[0]} populated row(s) x {table.shape[1]} column(s)",
        )

    observed = table.to_numpy(dtype=np.int64)
    try:
        statistic, asymptotic_p, dof, expected = stats.chi2_contingency(observed, correction=False)
        simulated_p = _simulated_p_value(
            observed, expected, float(statistic), settings.n_simulations, settings.random_seed,
        )
    except ValueError as exc:
        return failed(name, kind, headline, f"chi-squared test could not be computed: {exc}")

    notes = []
    low = int((expected < settings.min_expected_count).sum())
    if low:
        notes.append(
            f"{low} expected cell count(s) below {settings.min_expected_count:g}; "
            "the chi-squared approximation may be unreliable"
        )

    report = table.copy()
    report.columns = [str(col) for col in report.columns]
    report["total"] = report.sum(axis=1)
    positive = str(table.columns[-1])
    report[f"{positive} rate"] = (report[positive] / report["total"]).round(4)
    report = report.reset_index()

    return succeeded(
        name,
        kind,
        headline,
        table=report,
        statistics={
            "statistic": float(statistic),
            "df": int(dof),
            "p_value": simulated_p,
            "asymptotic_p_value": float(asymptotic_p),
            "n_simulations": settings.n_simulations,
            "n": int(observed.sum()),
            "low_expected_counts": low > 0,
            "interpretation": significance_statement(
                simulated_p, settings.alpha, f"association between {factor} and {outcome}",
            ),
        },
        notes=notes,
    )
