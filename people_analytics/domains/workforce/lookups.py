"""Resolve coded lookup IDs (education, satisfaction, rating) to ordered labels."""

import logging
from dataclasses import dataclass

import pandas as pd

from people_analytics.config import LevelOrders
from people_analytics.utils.types import ConfigurationError, LookupMiss

logger = logging.getLogger(__name__)

type LookupCode = int
type LookupLabel = str

# (lookup name, code column, label column) after column normalization
LOOKUP_COLUMNS: dict[str, tuple[str, str]] = {
    "education": ("education_level_id", "education_level"),
    "satisfaction": ("satisfaction_id", "satisfaction_level"),
    "rating": ("rating_id", "rating_level"),
}


@dataclass(frozen=True)
class LookupTable:
    name: str
    labels: dict[LookupCode, LookupLabel]
    order: tuple[LookupLabel, ...]

    def __post_init__(self) -> None:
        unranked = sorted(set(self.labels.values()) - set(self.order))
        if unranked:
            raise ConfigurationError(
                f"Lookup '{self.name}' has labels missing from the declared order: {unranked}"
            )

    def resolve(self, code: object) -> LookupLabel:
        try:
            key = int(code)
        except (TypeError, ValueError) as exc:
            raise LookupMiss(self.name, code) from exc
        if key != code or key not in self.labels:
            raise LookupMiss(self.name, code)
        return self.labels[key]

    def _resolve_or_none(self, code: object) -> LookupLabel | None:
        if pd.isna(code):
            return None
        try:
            return self.resolve(code)
        except LookupMiss:
            return None

    def resolve_series(self, codes: pd.Series) -> pd.Series:
        """Map a column of codes to labels; unknown codes become null."""
        resolved = codes.map(self._resolve_or_none).astype(object)
        misses = codes.notna() & resolved.isna()
        if misses.any():
            sample = sorted({str(c) for c in codes[misses]})[:5]
            logger.warning(
                "Lookup '%s': %d value(s) of '%s' had no label (codes %s)",
                self.name,
                int(misses.sum()),
                codes.name,
                sample,
            )
        return resolved.where(resolved.notna(), None)

    def rank(self, label: LookupLabel) -> int:
        """1-based position of a label in the declared order."""
        return self.order.index(label) + 1


def build_lookup(
    name: str,
    frame: pd.DataFrame,
    code_column: str,
    label_column: str,
    order: tuple[LookupLabel, ...],
) -> LookupTable:
    """Build a LookupTable from a normalized (code, label) frame."""
    missing = {code_column, label_column} - set(frame.columns)
    if missing:
        raise ConfigurationError(f"Lookup '{name}' is missing columns: {sorted(missing)}")

    pairs = frame[[code_column, label_column]].dropna()
    if pairs[code_column].duplicated().any():
        dupes = sorted(pairs.loc[pairs[code_column].duplicated(), code_column].astype(str))
        raise ConfigurationError(f"Lookup '{name}' has duplicate codes: {dupes}")

    labels = {
        int(code): str(label).strip()
        for code, label in zip(pairs[code_column], pairs[label_column])
    }
    logger.debug("Built lookup '%s' with %d codes", name, len(labels))
    return LookupTable(name=name, labels=labels, order=tuple(order))


def build_lookups(frames: dict[str, pd.DataFrame], orders: LevelOrders) -> dict[str, LookupTable]:
    """Build the education, satisfaction and rating lookups from their source frames."""
    declared = {
        "education": orders.education,
        "satisfaction": orders.satisfaction,
        "rating": orders.rating,
    }
    tables = {}
    for name, (code_column, label_column) in LOOKUP_COLUMNS.items():
        if name not in frames:
            raise ConfigurationError(f"Lookup table '{name}' was not loaded")
        tables[name] = build_lookup(name, frames[name], code_column, label_column, declared[name])
    return tables
