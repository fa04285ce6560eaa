"""Run analyses in isolation so one failure never blocks the next."""

import logging
from collections.abc import Callable

from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.utils.types import AnalysisResult, ConfigurationError, FieldName, failed

logger = logging.getLogger(__name__)

type AnalysisCall = Callable[[], AnalysisResult]
type AnalysisStep = tuple[str, str, AnalysisCall]


def run_guarded(name: str, kind: str, call: AnalysisCall) -> AnalysisResult:
    """Invoke one analysis, converting raised errors into a FAILED result."""
    try:
        return call()
    except ConfigurationError as exc:
        logger.error("%s: configuration error: %s", name, exc)
        return failed(name, kind, name, f"configuration error: {exc}")
    except Exception as exc:
        logger.exception("%s: unexpected error", name)
        return failed(name, kind, name, f"Unexpected: {exc}")


def run_steps(steps: list[AnalysisStep]) -> list[AnalysisResult]:
    results = []
    for name, kind, call in steps:
        result = run_guarded(name, kind, call)
        logger.info("%s: %s", name, result.status)
        results.append(result)
    return results


def check_required_fields(dataset: AnalyticalDataset, required: tuple[FieldName, ...]) -> dict[str, str | int]:
    """Domain validation result: ok when every required field is in the dataset."""
    missing = [name for name in required if not dataset.has(name)]
    match missing:
        case []:
            return {"status": "ok", "rows_available": dataset.employee_count}
        case names if len(names) == len(required):
            return {"status": "skipped", "reason": "none of the required fields are present"}
        case names:
            return {"status": "error", "message": f"Missing fields: {', '.join(names)}"}
