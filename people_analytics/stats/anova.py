"""One-way ANOVA (Type II sums of squares) with Tukey HSD follow-up."""

import logging
import math

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from statsmodels.stats.anova import anova_lm
from statsmodels.stats.multicomp import pairwise_tukeyhsd

from people_analytics.config import StatsSettings
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats.interpret import significance_statement
from people_analytics.stats.specs import CATEGORICAL_KINDS, AnovaSpec, check_field
from people_analytics.utils.types import AnalysisResult, ConfigurationError, FieldKind, failed, skipped, succeeded

logger = logging.getLogger(__name__)

KIND = "anova"


def _tukey_pairs(frame: pd.DataFrame, outcome: str, group: str, alpha: float) -> pd.DataFrame:
    """Pairs whose difference stays significant after Tukey adjustment."""
    tukey = pairwise_tukeyhsd(
        endog=frame[outcome].astype(float),
        groups=frame[group].astype(str),
        alpha=alpha,
    )
    rows = []
    for row in tukey.summary().data[1:]:
        if not bool(row[6]):
            continue
        rows.append(
            {
                "group1": str(row[0]),
                "group2": str(row[1]),
                "mean_diff": float(row[2]),
                "p_adj": float(row[3]),
                "ci_lower": float(row[4]),
                "ci_upper": float(row[5]),
            }
        )
    return pd.DataFrame(rows, columns=["group1", "group2", "mean_diff", "p_adj", "ci_lower", "ci_upper"])


def run_anova(
    dataset: AnalyticalDataset,
    spec: AnovaSpec,
    settings: StatsSettings = StatsSettings(),
) -> AnalysisResult:
    """Test whether the mean of ``spec.outcome`` differs across ``spec.group``.

    Tukey's HSD is only run when the omnibus test is significant and there
    are more than two groups; with two groups the omnibus test already
    identifies the differing pair.
    """
    headline = f"One-way ANOVA (Type II): {spec.outcome} by {spec.group}"
    check_field(spec.outcome, {FieldKind.NUMERIC}, "outcome")
    check_field(spec.group, CATEGORICAL_KINDS, "grouping")
    if not spec.outcome.isidentifier() or not spec.group.isidentifier():
        raise ConfigurationError(f"Field names must be identifiers for ANOVA: {spec}")

    frame = dataset.select([spec.outcome, spec.group]).dropna()
    frame[spec.outcome] = frame[spec.outcome].astype(float)
    if isinstance(frame[spec.group].dtype, pd.CategoricalDtype):
        frame[spec.group] = frame[spec.group].cat.remove_unused_categories()

    sizes = frame.groupby(spec.group, observed=True).size()
    if len(sizes) < 2:
        return skipped(
            spec.name, KIND, headline,
            f"grouping variable '{spec.group}' has {len(sizes)} level(s) with data; at least 2 are required",
        )

    notes = []
    small = sizes[sizes < 2]
    if not small.empty:
        notes.append(f"Groups with fewer than 2 observations: {', '.join(map(str, small.index))}")

    try:
        model = smf.ols(f"{spec.outcome} ~ C({spec.group})", data=frame).fit()
        table = anova_lm(model, typ=2)
    except (np.linalg.LinAlgError, ValueError) as exc:
        logger.warning("%s: ANOVA failed: %s", spec.name, exc)
        return failed(spec.name, KIND, headline, f"model could not be fitted: {exc}")

    term = f"C({spec.group})"
    f_value = float(table.loc[term, "F"])
    p_value = float(table.loc[term, "PR(>F)"])
    if not (math.isfinite(f_value) and math.isfinite(p_value)):
        return failed(spec.name, KIND, headline, "F statistic is undefined (no residual variation)")

    table = table.rename(index={term: spec.group}).reset_index(names="source")
    group_means = (
        frame.groupby(spec.group, observed=True)[spec.outcome]
        .agg(["count", "mean", "std"])
        .reset_index()
    )

    extra = {"group means": group_means}
    significant = p_value < settings.alpha
    if significant and len(sizes) > 2:
        try:
            extra["Tukey HSD significant pairs"] = _tukey_pairs(frame, spec.outcome, spec.group, settings.alpha)
        except (ValueError, np.linalg.LinAlgError) as exc:
            notes.append(f"Tukey HSD could not be computed: {exc}")
    elif significant:
        notes.append("Two groups only: the omnibus test identifies the differing pair; no post-hoc test run")

    return succeeded(
        spec.name,
        KIND,
        headline,
        table=table,
        statistics={
            "n": int(len(frame)),
            "groups": int(len(sizes)),
            "f_statistic": f_value,
            "p_value": p_value,
            "post_hoc": "Tukey HSD" if "Tukey HSD significant pairs" in extra else "none",
            "interpretation": significance_statement(
                p_value, settings.alpha, f"difference in mean {spec.outcome} across {spec.group} groups",
            ),
        },
        notes=notes,
        extra_tables=extra,
    )
