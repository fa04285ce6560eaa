"""Join employees with their most recent review and resolved lookup labels."""

import logging

import numpy as np
import pandas as pd

from people_analytics.domains.workforce.lookups import LookupTable
from people_analytics.domains.workforce.models import ORDINAL_FIELDS
from people_analytics.utils.transforms import check_join_keys, merge_datasets
from people_analytics.utils.types import ConfigurationError

logger = logging.getLogger(__name__)

JOIN_KEY = "employee_id"
_INPUT_ORDER = "_input_order"


def latest_review_per_employee(reviews: pd.DataFrame) -> pd.DataFrame:
    """Keep the review with the latest ``review_date`` for each employee.

    Reviews sharing the maximum date resolve to the one that appears first in
    the input. Undated reviews only win when an employee has no dated review.
    The result has one row per employee, in employee-id order.
    """
    missing = {JOIN_KEY, "review_date"} - set(reviews.columns)
    if missing:
        raise ConfigurationError(f"Performance table is missing columns: {sorted(missing)}")

    df = reviews.copy()
    df["review_date"] = pd.to_datetime(df["review_date"], errors="coerce")

    unkeyed = df[JOIN_KEY].isna()
    if unkeyed.any():
        logger.warning("Dropping %d review(s) without an employee id", int(unkeyed.sum()))
        df = df[~unkeyed]

    df[_INPUT_ORDER] = np.arange(len(df))
    ordered = df.sort_values(
        [JOIN_KEY, "review_date", _INPUT_ORDER],
        ascending=[True, False, True],
        na_position="last",
    )
    latest = (
        ordered.drop_duplicates(subset=[JOIN_KEY], keep="first")
        .drop(columns=[_INPUT_ORDER])
        .reset_index(drop=True)
    )

    logger.info(
        "Selected latest review for %d employees from %d reviews", len(latest), len(reviews),
    )
    return latest


def attach_lookup_labels(combined: pd.DataFrame, lookups: dict[str, LookupTable]) -> pd.DataFrame:
    """Add a label column next to every coded ordinal field; codes are retained."""
    df = combined.copy()
    for ordinal in ORDINAL_FIELDS:
        if ordinal.lookup is None or ordinal.code_column not in df.columns:
            continue
        if ordinal.lookup not in lookups:
            raise ConfigurationError(f"No lookup table named '{ordinal.lookup}'")
        df[ordinal.label_column] = lookups[ordinal.lookup].resolve_series(df[ordinal.code_column])
    return df


def merge_employee_reviews(
    employees: pd.DataFrame,
    latest_reviews: pd.DataFrame,
    lookups: dict[str, LookupTable],
) -> pd.DataFrame:
    """Left-join every employee to their latest review and resolve lookup labels.

    Employees without a review keep null review fields. Key problems (missing
    key, mismatched key types, duplicate employee ids) are fatal because every
    downstream analysis depends on this table.
    """
    check_join_keys(employees, latest_reviews, JOIN_KEY)

    if employees[JOIN_KEY].isna().any():
        raise ConfigurationError("Employee table has rows without an employee id")
    duplicated = employees[JOIN_KEY].duplicated()
    if duplicated.any():
        sample = employees.loc[duplicated, JOIN_KEY].astype(str).head(5).tolist()
        raise ConfigurationError(f"Employee ids are not unique, e.g. {sample}")
    if latest_reviews[JOIN_KEY].duplicated().any():
        raise ConfigurationError("Review table must hold at most one review per employee")

    orphans = ~latest_reviews[JOIN_KEY].isin(employees[JOIN_KEY])
    if orphans.any():
        logger.warning("Ignoring reviews for %d unknown employee id(s)", int(orphans.sum()))

    combined = merge_datasets(employees, latest_reviews, on=JOIN_KEY, how="left", validate="one_to_one")
    if len(combined) != len(employees):
        raise RuntimeError(
            f"Left join changed the row count: {len(employees)} -> {len(combined)}"
        )

    combined = attach_lookup_labels(combined, lookups)
    reviewed = int(combined[JOIN_KEY].isin(latest_reviews[JOIN_KEY]).sum())
    logger.info(
        "Merged %d employees; %d with a review, %d without",
        len(combined),
        reviewed,
        len(combined) - reviewed,
    )
    return combined
