"""Build the read-only analytical dataset shared by every analysis."""

import logging
from dataclasses import dataclass

import pandas as pd

from people_analytics.config import LevelOrders
from people_analytics.domains.workforce.coercion import coerce_types
from people_analytics.domains.workforce.ingest import SourceTables
from people_analytics.domains.workforce.lookups import LookupTable, build_lookups
from people_analytics.domains.workforce.merge import (
    latest_review_per_employee,
    merge_employee_reviews,
)
from people_analytics.domains.workforce.models import FIELD_KINDS
from people_analytics.utils.types import ConfigurationError, FieldKind, FieldName

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticalDataset:
    """One row per employee joined to their latest review, typed for analysis.

    Analyses read through :meth:`select`, which hands out copies, so the
    underlying frame is never modified after construction.
    """

    frame: pd.DataFrame
    lookups: dict[str, LookupTable]
    employee_count: int
    reviewed_count: int

    @property
    def columns(self) -> list[FieldName]:
        return list(self.frame.columns)

    def has(self, name: FieldName) -> bool:
        return name in self.frame.columns

    def kind_of(self, name: FieldName) -> FieldKind:
        if name not in FIELD_KINDS:
            raise ConfigurationError(f"Unknown field '{name}'")
        return FIELD_KINDS[name]

    def select(self, columns: list[FieldName]) -> pd.DataFrame:
        absent = [c for c in columns if c not in self.frame.columns]
        if absent:
            raise ConfigurationError(f"Fields not present in the dataset: {absent}")
        return self.frame[list(dict.fromkeys(columns))].copy()


def build_dataset(sources: SourceTables, orders: LevelOrders) -> AnalyticalDataset:
    """Run lookup resolution, the latest-review merge and type coercion."""
    lookups = build_lookups(sources.lookups, orders)
    latest = latest_review_per_employee(sources.performance)
    combined = merge_employee_reviews(sources.employees, latest, lookups)
    typed = coerce_types(combined, orders)

    reviewed = int(typed["employee_id"].isin(latest["employee_id"]).sum())
    logger.info("Analytical dataset ready: %d rows, %d columns", len(typed), len(typed.columns))
    return AnalyticalDataset(
        frame=typed,
        lookups=lookups,
        employee_count=len(typed),
        reviewed_count=reviewed,
    )
