"""Common data transformation utilities."""

import re

import pandas as pd

from people_analytics.utils.types import ConfigurationError

type ColumnMapping = dict[str, str]

_NON_WORD = re.compile(r"[^0-9a-zA-Z]+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """``DistanceFromHome (KM)`` -> ``distance_from_home_km``."""
    text = _NON_WORD.sub("_", name.strip())
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    return re.sub(r"_+", "_", text).strip("_").lower()


def normalize_columns(df: pd.DataFrame, mapping: ColumnMapping | None = None) -> pd.DataFrame:
    """Normalize column names to snake_case and apply optional mapping."""
    df = df.copy()
    df.columns = [to_snake_case(str(col)) for col in df.columns]

    if mapping:
        df = df.rename(columns=mapping)

    return df


def check_join_keys(left: pd.DataFrame, right: pd.DataFrame, on: str) -> None:
    """Fail fast when the join key is missing or typed differently on each side."""
    for side, frame in (("left", left), ("right", right)):
        if on not in frame.columns:
            raise ConfigurationError(f"Join key '{on}' missing from {side} table")

    left_kind = left[on].dtype.kind
    right_kind = right[on].dtype.kind
    # Object and string columns are interchangeable for joining purposes
    textual = {"O", "U", "S", "T"}
    if left_kind != right_kind and not (left_kind in textual and right_kind in textual):
        raise ConfigurationError(
            f"Join key '{on}' has mismatched types: {left[on].dtype} vs {right[on].dtype}"
        )


def merge_datasets(
    left: pd.DataFrame,
    right: pd.DataFrame,
    on: str,
    how: str = "left",
    validate: str | None = None,
) -> pd.DataFrame:
    """Merge two datasets after checking the join key on both sides."""
    check_join_keys(left, right, on)

    match how:
        case "left" | "right" | "inner" | "outer":
            result = pd.merge(left, right, on=on, how=how, validate=validate, sort=False)
        case other:
            raise ValueError(f"Unsupported merge type: {other}")

    return result
