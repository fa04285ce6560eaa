"""File I/O utilities for reading source tables and writing pipeline output."""

import logging
import tomllib
from pathlib import Path

import pandas as pd

type FilePath = str | Path

logger = logging.getLogger(__name__)


def read_delimited_file(
    path: FilePath,
    delimiter: str = ",",
) -> pd.DataFrame:
    """Read a delimited export, trying the encodings HRIS tools commonly emit."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file missing: {path}")

    for encoding in ("utf-8", "latin-1", "cp1252"):
        try:
            df = pd.read_csv(path, sep=delimiter, encoding=encoding)
            break
        except UnicodeDecodeError:
            continue
    else:
        raise ValueError(f"Could not decode {path}")

    logger.info("Read %d rows from %s", len(df), path.name)
    return df


def write_output(df: pd.DataFrame, path: FilePath) -> Path:
    """Write a DataFrame, picking the format from the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match path.suffix.lower():
        case ".csv":
            df.to_csv(path, index=False)
        case ".tsv":
            df.to_csv(path, index=False, sep="\t")
        case ".json":
            df.to_json(path, orient="records", indent=2, date_format="iso")
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    logger.info("Wrote %d rows to %s", len(df), path)
    return path


def load_toml_config(path: FilePath) -> dict:
    """Load a TOML configuration file using Python 3.11+ stdlib."""
    with open(path, "rb") as f:
        return tomllib.load(f)
