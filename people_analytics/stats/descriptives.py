"""Descriptive summaries: attrition rates by segment and numeric field profiles."""

import logging

import pandas as pd

from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats.specs import CATEGORICAL_KINDS, check_field
from people_analytics.utils.types import AnalysisResult, FieldKind, FieldName, skipped, succeeded

logger = logging.getLogger(__name__)


def attrition_rate_by(
    dataset: AnalyticalDataset,
    factor: FieldName,
    outcome: FieldName = "attrition",
) -> AnalysisResult:
    """Headcount, leavers and attrition rate for each level of ``factor``."""
    name = f"{outcome} rate by {factor}"
    kind = "descriptive"
    headline = f"{outcome.capitalize()} rate by {factor}"
    check_field(outcome, {FieldKind.BINARY}, "outcome")
    check_field(factor, CATEGORICAL_KINDS, "factor")

    frame = dataset.select([factor, outcome]).dropna()
    if frame.empty:
        return skipped(name, kind, headline, "no rows with both fields present")

    positive = frame[outcome].cat.categories[-1]
    frame["is_positive"] = frame[outcome] == positive
    rates = (
        frame.groupby(factor, observed=True)
        .agg(headcount=("is_positive", "size"), leavers=("is_positive", "sum"))
        .reset_index()
    )
    rates["leavers"] = rates["leavers"].astype(int)
    rates["rate"] = (rates["leavers"] / rates["headcount"]).round(4)

    overall = frame["is_positive"].mean()
    highest = rates.loc[rates["rate"].idxmax()]
    return succeeded(
        name,
        kind,
        headline,
        table=rates,
        statistics={
            "n": int(len(frame)),
            "overall_rate": round(float(overall), 4),
            "interpretation": (
                f"Overall {outcome} rate is {overall:.1%}; highest in "
                f"{factor} = {highest[factor]} ({highest['rate']:.1%})."
            ),
        },
    )


def summarize_numeric(dataset: AnalyticalDataset, fields: tuple[FieldName, ...]) -> AnalysisResult:
    """Count, mean, spread and range for each numeric field present."""
    name = "numeric profile"
    kind = "descriptive"
    headline = "Numeric field profile"
    for field in fields:
        check_field(field, {FieldKind.NUMERIC}, "summary")

    present = [f for f in fields if dataset.has(f)]
    if not present:
        return skipped(name, kind, headline, "none of the requested fields are present")

    data = dataset.select(present).astype("float64")
    summary = data.agg(["count", "mean", "std", "median", "min", "max"]).T.round(3)
    summary["missing"] = len(data) - summary["count"].astype(int)
    summary = summary.reset_index(names="field")
    logger.debug("Profiled %d numeric fields", len(summary))
    return succeeded(name, kind, headline, table=summary, statistics={"n": int(len(data))})
