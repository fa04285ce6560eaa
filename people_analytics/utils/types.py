"""Shared type definitions for the analysis pipeline."""

from dataclasses import dataclass, field
from enum import StrEnum

import pandas as pd


type FieldName = str
type EmployeeID = str
type StatValue = int | float | str | bool | None
type Statistics = dict[str, StatValue]
type ValidationOutcome = dict[str, bool | str | list[str]]


class ConfigurationError(ValueError):
    """A declared field, join key or type does not match the data."""


class LookupMiss(KeyError):
    """A coded value has no entry in its lookup table."""

    def __init__(self, table: str, code: object):
        super().__init__(f"Code {code!r} not found in lookup table '{table}'")
        self.table = table
        self.code = code


class AnalysisStatus(StrEnum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


class FieldKind(StrEnum):
    IDENTIFIER = "identifier"
    NUMERIC = "numeric"
    ORDINAL = "ordinal"
    NOMINAL = "nominal"
    BINARY = "binary"
    DATE = "date"
    CODE = "code"
    TEXT = "text"


@dataclass(frozen=True)
class AnalysisResult:
    name: str
    kind: str
    status: AnalysisStatus
    headline: str
    table: pd.DataFrame | None = None
    statistics: Statistics = field(default_factory=dict)
    notes: tuple[str, ...] = ()
    reason: str | None = None
    extra_tables: dict[str, pd.DataFrame] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is AnalysisStatus.OK


def succeeded(
    name: str,
    kind: str,
    headline: str,
    table: pd.DataFrame | None = None,
    statistics: Statistics | None = None,
    notes: list[str] | tuple[str, ...] = (),
    extra_tables: dict[str, pd.DataFrame] | None = None,
) -> AnalysisResult:
    return AnalysisResult(
        name=name,
        kind=kind,
        status=AnalysisStatus.OK,
        headline=headline,
        table=table,
        statistics=statistics or {},
        notes=tuple(notes),
        extra_tables=extra_tables or {},
    )


def skipped(name: str, kind: str, headline: str, reason: str) -> AnalysisResult:
    """Data-insufficiency outcome: the analysis was not attempted."""
    return AnalysisResult(
        name=name, kind=kind, status=AnalysisStatus.SKIPPED, headline=headline, reason=reason,
    )


def failed(name: str, kind: str, headline: str, reason: str) -> AnalysisResult:
    """Fit failure or configuration problem scoped to a single analysis."""
    return AnalysisResult(
        name=name, kind=kind, status=AnalysisStatus.FAILED, headline=headline, reason=reason,
    )
