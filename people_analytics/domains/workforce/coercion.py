"""Assign ordinal, nominal and binary semantics to the merged employee table."""

import logging

import pandas as pd

from people_analytics.config import LevelOrders
from people_analytics.domains.workforce.models import (
    NOMINAL_FIELDS,
    NUMERIC_FIELDS,
    ORDINAL_FIELDS,
    OUTCOME_FIELD,
    OUTCOME_LEVELS,
    OrdinalField,
)

logger = logging.getLogger(__name__)

_POSITIVE = {"yes", "y", "true", "t", "1", "1.0"}
_NEGATIVE = {"no", "n", "false", "f", "0", "0.0"}


def _normalize_yes_no(value: object) -> str | None:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    token = str(value).strip().lower()
    if token in _POSITIVE:
        return "Yes"
    if token in _NEGATIVE:
        return "No"
    logger.warning("Unrecognized %s value %r treated as missing", OUTCOME_FIELD, value)
    return None


def coerce_outcome(values: pd.Series) -> pd.Series:
    """Two-level categorical with "No" as reference and "Yes" as the positive level."""
    normalized = values.map(_normalize_yes_no)
    return pd.Series(
        pd.Categorical(normalized, categories=list(OUTCOME_LEVELS)),
        index=values.index,
        name=values.name,
    )


def _order_for(ordinal: OrdinalField, orders: LevelOrders) -> list:
    match ordinal.lookup:
        case "education":
            return list(orders.education)
        case "satisfaction":
            return list(orders.satisfaction)
        case "rating":
            return list(orders.rating)
        case None:
            return list(orders.stock_option)
        case other:
            raise ValueError(f"No declared order for lookup '{other}'")


def coerce_ordinal(values: pd.Series, order: list) -> pd.Series:
    """Ordered categorical over an explicit category order."""
    if all(isinstance(level, int) for level in order):
        values = pd.to_numeric(values, errors="coerce").astype("Int64")
    categorical = pd.Categorical(values, categories=order, ordered=True)

    unmatched = int((values.notna() & (categorical.codes == -1)).sum())
    if unmatched:
        logger.warning(
            "%d value(s) of '%s' fall outside the declared order and are treated as missing",
            unmatched,
            values.name,
        )
    return pd.Series(categorical, index=values.index, name=values.name)


def rank_projection(ordered: pd.Series) -> pd.Series:
    """Integer rank of each category (1 = lowest), null where the category is missing."""
    codes = pd.Series(ordered.cat.codes, index=ordered.index)
    return (codes + 1).where(codes >= 0).astype("Int64")


def coerce_types(combined: pd.DataFrame, orders: LevelOrders) -> pd.DataFrame:
    """Return a typed copy of the combined table with rank projections added."""
    df = combined.copy()

    for name in NUMERIC_FIELDS:
        if name in df.columns:
            df[name] = pd.to_numeric(df[name], errors="coerce")

    for ordinal in ORDINAL_FIELDS:
        if ordinal.label_column not in df.columns:
            continue
        ordered = coerce_ordinal(df[ordinal.label_column], _order_for(ordinal, orders))
        df[ordinal.label_column] = ordered
        df[ordinal.rank_column] = rank_projection(ordered)

    for name in NOMINAL_FIELDS:
        if name in df.columns and not isinstance(df[name].dtype, pd.CategoricalDtype):
            cleaned = df[name].where(df[name].isna(), df[name].astype(str).str.strip())
            df[name] = cleaned.astype("category")

    if OUTCOME_FIELD in df.columns:
        df[OUTCOME_FIELD] = coerce_outcome(df[OUTCOME_FIELD])

    for name in ("hire_date", "review_date"):
        if name in df.columns:
            df[name] = pd.to_datetime(df[name], errors="coerce")

    logger.info("Typed %d columns across %d rows", len(df.columns), len(df))
    return df
