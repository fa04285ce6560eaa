"""Pairwise correlations over numeric fields and ordinal rank projections."""

import logging
from itertools import combinations

import pandas as pd
from scipy import stats

from people_analytics.config import StatsSettings
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats.specs import check_field
from people_analytics.utils.types import AnalysisResult, FieldKind, FieldName, skipped, succeeded

logger = logging.getLogger(__name__)

KIND = "correlation"
MIN_PAIRS = 3


def correlate(
    dataset: AnalyticalDataset,
    name: str,
    fields: tuple[FieldName, ...],
    method: str = "spearman",
    settings: StatsSettings = StatsSettings(),
) -> AnalysisResult:
    """Pairwise-complete correlation matrix with a p-value for every pair."""
    match method:
        case "spearman":
            test = stats.spearmanr
        case "pearson":
            test = stats.pearsonr
        case other:
            raise ValueError(f"Unsupported correlation method: {other}")

    headline = f"{method.capitalize()} correlations: {', '.join(fields)}"
    for field in fields:
        check_field(field, {FieldKind.NUMERIC}, "correlation")

    present = [f for f in fields if dataset.has(f)]
    data = dataset.select(present).astype("float64") if present else pd.DataFrame()
    usable = [f for f in present if data[f].notna().sum() >= MIN_PAIRS and data[f].nunique() > 1]
    if len(usable) < 2:
        return skipped(name, KIND, headline, f"need at least 2 fields with variation, found {len(usable)}")

    rows = []
    for left, right in combinations(usable, 2):
        pair = data[[left, right]].dropna()
        if len(pair) < MIN_PAIRS or pair[left].nunique() < 2 or pair[right].nunique() < 2:
            continue
        coefficient, p_value = test(pair[left], pair[right])
        rows.append(
            {
                "field_a": left,
                "field_b": right,
                "n": len(pair),
                "r": float(coefficient),
                "p_value": float(p_value),
                "significant": bool(p_value < settings.alpha),
            }
        )

    if not rows:
        return skipped(name, KIND, headline, "no pair of fields has enough overlapping observations")

    table = pd.DataFrame(rows)
    logger.debug("%s: correlated %d field pairs", name, len(table))
    strongest = table.loc[table["r"].abs().idxmax()]
    notes = []
    skipped_fields = sorted(set(fields) - set(usable))
    if skipped_fields:
        notes.append(f"Fields without enough data or variation: {skipped_fields}")

    return succeeded(
        name,
        KIND,
        headline,
        table=table,
        statistics={
            "method": method,
            "pairs": int(len(table)),
            "significant_pairs": int(table["significant"].sum()),
            "interpretation": (
                f"Strongest association: {strongest['field_a']} and {strongest['field_b']} "
                f"(r = {strongest['r']:.3f}); {int(table['significant'].sum())} of {len(table)} "
                f"pairs are significant at alpha = {settings.alpha}."
            ),
        },
        notes=notes,
        extra_tables={"matrix": data[usable].corr(method=method).round(3)},
    )

