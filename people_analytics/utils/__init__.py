"""Shared utilities for the analysis pipeline."""

from people_analytics.utils.io import read_delimited_file, write_output
from people_analytics.utils.transforms import normalize_columns, merge_datasets
from people_analytics.utils.validators import validate_dataframe
from people_analytics.utils.types import (
    AnalysisResult,
    AnalysisStatus,
    ConfigurationError,
    FieldKind,
    LookupMiss,
)
