"""Analysis specifications and the shared data-preparation discipline.

Every test or model is declared as a frozen spec naming its outcome and
inputs. Specs are checked against the static field registry before any data
is touched, then reduced to complete cases over the fields actually used.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.domains.workforce.models import FIELD_KINDS
from people_analytics.utils.types import ConfigurationError, FieldKind, FieldName

logger = logging.getLogger(__name__)

CATEGORICAL_KINDS = frozenset({FieldKind.NOMINAL, FieldKind.ORDINAL, FieldKind.BINARY})
PREDICTOR_KINDS = CATEGORICAL_KINDS | {FieldKind.NUMERIC}


@dataclass(frozen=True)
class ComparisonSpec:
    """Two-group comparison of ``field`` across the levels of a binary ``outcome``."""

    name: str
    outcome: FieldName
    field: FieldName


@dataclass(frozen=True)
class ModelSpec:
    name: str
    outcome: FieldName
    predictors: tuple[FieldName, ...]


@dataclass(frozen=True)
class AnovaSpec:
    name: str
    outcome: FieldName
    group: FieldName


@dataclass(frozen=True)
class PreparedData:
    frame: pd.DataFrame
    predictors: tuple[FieldName, ...]
    absent: tuple[FieldName, ...]
    dropped_rows: int


def check_field(name: FieldName, allowed: frozenset[FieldKind] | set[FieldKind], role: str) -> FieldKind:
    """Raise ConfigurationError unless ``name`` is a known field of an allowed kind."""
    if name not in FIELD_KINDS:
        raise ConfigurationError(f"Unknown {role} field '{name}'")
    kind = FIELD_KINDS[name]
    if kind not in allowed:
        expected = ", ".join(sorted(allowed))
        raise ConfigurationError(f"{role.capitalize()} '{name}' is {kind}; expected one of: {expected}")
    return kind


def prepare_model_data(
    dataset: AnalyticalDataset,
    spec: ModelSpec,
    outcome_kinds: set[FieldKind],
) -> PreparedData:
    """Validate a model spec, intersect predictors with the dataset and keep complete cases."""
    check_field(spec.outcome, outcome_kinds, "outcome")
    for predictor in spec.predictors:
        check_field(predictor, PREDICTOR_KINDS, "predictor")
        if predictor == spec.outcome:
            raise ConfigurationError(f"Outcome '{spec.outcome}' cannot also be a predictor")

    if not dataset.has(spec.outcome):
        raise ConfigurationError(f"Outcome '{spec.outcome}' is not present in the dataset")

    present = tuple(p for p in dict.fromkeys(spec.predictors) if dataset.has(p))
    absent = tuple(p for p in spec.predictors if not dataset.has(p))
    if absent:
        logger.warning("%s: predictors not in dataset and left out: %s", spec.name, list(absent))

    frame = dataset.select([spec.outcome, *present])
    complete = frame.dropna(subset=[spec.outcome, *present])
    return PreparedData(
        frame=complete,
        predictors=present,
        absent=absent,
        dropped_rows=len(frame) - len(complete),
    )


def insufficiency(prepared: PreparedData, outcome: FieldName, min_levels: int | None = 2) -> str | None:
    """Describe why prepared data cannot support a fit, or None when it can."""
    if len(prepared.frame) == 0:
        return "no complete cases remain after removing rows with missing values"
    if not prepared.predictors:
        return "none of the declared predictors are present in the dataset"
    if min_levels is not None:
        levels = prepared.frame[outcome].nunique(dropna=True)
        if levels < min_levels:
            return (
                f"outcome '{outcome}' has {levels} level(s) after complete-case filtering; "
                f"at least {min_levels} are required"
            )
    return None


def design_matrix(frame: pd.DataFrame, predictors: tuple[FieldName, ...]) -> tuple[pd.DataFrame, list[str]]:
    """Numeric design matrix without an intercept.

    Categorical predictors are treatment coded against their first observed
    level. Columns without variation are removed and reported in the notes.
    """
    blocks = []
    notes = []
    for name in predictors:
        series = frame[name]
        if isinstance(series.dtype, pd.CategoricalDtype):
            series = series.cat.remove_unused_categories()
            dummies = pd.get_dummies(series, prefix=name, prefix_sep=": ", drop_first=True, dtype=float)
            if dummies.empty or dummies.shape[1] == 0:
                notes.append(f"'{name}' has a single observed level and was left out")
                continue
            blocks.append(dummies)
        else:
            blocks.append(series.astype(float).to_frame(name))

    if not blocks:
        return pd.DataFrame(index=frame.index), notes

    design = pd.concat(blocks, axis=1)
    constant = [col for col in design.columns if design[col].nunique(dropna=False) <= 1]
    if constant:
        notes.append(f"Columns without variation removed: {constant}")
        design = design.drop(columns=constant)
    return design, notes


def is_full_rank(design: pd.DataFrame) -> bool:
    return int(np.linalg.matrix_rank(design.to_numpy(dtype=float))) == design.shape[1]
