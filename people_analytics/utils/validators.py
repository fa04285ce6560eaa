"""Source-table checks built on pandera, reported as validation outcome dicts."""

import pandas as pd
from pandera.errors import SchemaErrors
from pandera.pandas import DataFrameSchema

from people_analytics.utils.types import ValidationOutcome

MAX_SAMPLE = 5


def _outcome(errors: list[str]) -> ValidationOutcome:
    match errors:
        case []:
            return {"valid": True, "status": "ok", "errors": []}
        case _:
            return {"valid": False, "status": "error", "errors": errors}


def _describe_failure(failure: dict) -> str:
    match failure:
        case {"column": None, "check": check}:
            return f"Table failed check '{check}'"
        case {"column": col, "check": check, "failure_case": value, "index": None}:
            return f"Column '{col}' failed check '{check}': {value}"
        case {"column": col, "check": check, "failure_case": value, "index": row}:
            return f"Column '{col}' failed check '{check}' at row {row}: {value}"
        case other:
            return f"Validation failure: {other}"


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationOutcome:
    """Run a schema with lazy validation so every failing value is reported."""
    try:
        schema.validate(df, lazy=True)
    except SchemaErrors as exc:
        return _outcome([_describe_failure(row.to_dict()) for _, row in exc.failure_cases.iterrows()])
    return _outcome([])


def validate_unique(df: pd.DataFrame, columns: list[str]) -> ValidationOutcome:
    """Rows must be unique on ``columns``; the first duplicated keys are listed."""
    repeated = df.loc[df.duplicated(subset=columns, keep="first"), columns]
    if repeated.empty:
        return _outcome([])
    sample = repeated.head(MAX_SAMPLE).astype(str).agg("/".join, axis=1).tolist()
    return _outcome([f"{len(repeated)} repeated key(s) on {columns}, e.g. {sample}"])


def validate_referential_integrity(
    child: pd.DataFrame,
    parent: pd.DataFrame,
    child_key: str,
    parent_key: str,
) -> ValidationOutcome:
    """Every non-null ``child_key`` must appear in ``parent_key``."""
    known = set(parent[parent_key].dropna())
    dangling = sorted({str(key) for key in child[child_key].dropna() if key not in known})
    if not dangling:
        return _outcome([])
    return _outcome(
        [f"{len(dangling)} {child_key} value(s) missing from {parent_key}, e.g. {dangling[:MAX_SAMPLE]}"]
    )


def merge_outcomes(*outcomes: ValidationOutcome) -> ValidationOutcome:
    """Fold several validation outcomes into one."""
    return _outcome([err for outcome in outcomes for err in outcome["errors"]])
