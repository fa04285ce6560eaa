"""Workforce domain: ingest, latest-review merge, lookup resolution and typing.

Produces the single AnalyticalDataset every analysis domain reads from.
"""

from pathlib import Path

from people_analytics.config import AnalysisConfig
from people_analytics.domains.workforce.dataset import AnalyticalDataset, build_dataset
from people_analytics.domains.workforce.ingest import SourceTables, ingest_sources
from people_analytics.domains.workforce.lookups import LOOKUP_COLUMNS
from people_analytics.domains.workforce.models import (
    combined_schema,
    employee_schema,
    lookup_schema,
    performance_schema,
)
from people_analytics.utils.types import ValidationOutcome
from people_analytics.utils.validators import (
    merge_outcomes,
    validate_dataframe,
    validate_referential_integrity,
    validate_unique,
)


def validate_sources(sources: SourceTables) -> dict[str, ValidationOutcome]:
    """Run schema and key checks on each loaded source table."""
    results = {
        "employees": merge_outcomes(
            validate_dataframe(sources.employees, employee_schema),
            validate_unique(sources.employees, ["employee_id"]),
        ),
        "performance": merge_outcomes(
            validate_dataframe(sources.performance, performance_schema),
            validate_referential_integrity(
                sources.performance, sources.employees, "employee_id", "employee_id",
            ),
        ),
    }
    for name, (code_column, label_column) in LOOKUP_COLUMNS.items():
        results[name] = validate_dataframe(
            sources.lookups[name], lookup_schema(code_column, label_column),
        )
    return results


def validate(config: AnalysisConfig) -> dict[str, str | int]:
    """Validate that all workforce sources are present and well-formed."""
    try:
        ingest_sources(Path(config.data_dir), config.sources, dry_run=True)
    except FileNotFoundError as exc:
        return {"status": "error", "message": str(exc)}

    sources = ingest_sources(Path(config.data_dir), config.sources)
    failures = [
        f"{name}: {err}"
        for name, outcome in validate_sources(sources).items()
        for err in outcome["errors"]
    ]
    match failures:
        case []:
            return {"status": "ok", "rows_available": len(sources.employees)}
        case errs:
            return {"status": "error", "message": "; ".join(errs[:3])}


def validate_dataset(dataset: AnalyticalDataset) -> ValidationOutcome:
    """Check the typed employee-level table: unique ids, Yes/No outcome, ranks from 1."""
    return validate_dataframe(dataset.frame, combined_schema)


def run(config: AnalysisConfig) -> AnalyticalDataset:
    """Load every source and build the analytical dataset."""
    sources = ingest_sources(Path(config.data_dir), config.sources)
    return build_dataset(sources, config.orders)
