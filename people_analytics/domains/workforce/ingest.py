"""Ingest employee, performance and lookup exports from the data directory."""

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from people_analytics.config import SourceFiles
from people_analytics.utils.io import read_delimited_file
from people_analytics.utils.transforms import normalize_columns

logger = logging.getLogger(__name__)

# Raw headers that snake_case conversion alone does not map cleanly
COLUMN_ALIASES = {
    "distance_from_home": "distance_from_home_km",
    "overtime": "over_time",
}


@dataclass(frozen=True)
class SourceTables:
    employees: pd.DataFrame
    performance: pd.DataFrame
    lookups: dict[str, pd.DataFrame]


def _read_table(path: Path, delimiter: str, parse_dates: list[str] | None = None) -> pd.DataFrame:
    raw = read_delimited_file(path, delimiter=delimiter)
    df = normalize_columns(raw, mapping=COLUMN_ALIASES)
    for col in parse_dates or []:
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], errors="coerce")
    return df


def source_paths(data_dir: Path, sources: SourceFiles) -> dict[str, Path]:
    return {
        "employees": data_dir / sources.employees,
        "performance": data_dir / sources.performance,
        "education": data_dir / sources.education_levels,
        "satisfaction": data_dir / sources.satisfaction_levels,
        "rating": data_dir / sources.rating_levels,
    }


def ingest_sources(data_dir: Path, sources: SourceFiles, dry_run: bool = False) -> SourceTables:
    """Load the five source tables.

    With ``dry_run`` only the presence of every file is checked and empty
    frames are returned.
    """
    paths = source_paths(Path(data_dir), sources)
    missing = [str(path) for path in paths.values() if not path.exists()]
    if missing:
        raise FileNotFoundError(f"Source file(s) missing: {', '.join(missing)}")

    if dry_run:
        return SourceTables(pd.DataFrame(), pd.DataFrame(), {})

    employees = _read_table(paths["employees"], sources.delimiter, parse_dates=["hire_date"])
    performance = _read_table(paths["performance"], sources.delimiter, parse_dates=["review_date"])
    lookups = {
        name: _read_table(paths[name], sources.delimiter)
        for name in ("education", "satisfaction", "rating")
    }

    logger.info(
        "Ingested %d employees and %d performance reviews from %s",
        len(employees),
        len(performance),
        data_dir,
    )
    return SourceTables(employees=employees, performance=performance, lookups=lookups)
