"""Proportional-odds (ordinal logistic) regression for ratings and satisfaction."""

import logging
import warnings

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.miscmodels.ordinal_model import OrderedModel
from statsmodels.tools.numdiff import approx_hess
from statsmodels.tools.sm_exceptions import ConvergenceWarning, HessianInversionWarning

from people_analytics.config import StatsSettings
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats.specs import (
    ModelSpec,
    design_matrix,
    insufficiency,
    is_full_rank,
    prepare_model_data,
)
from people_analytics.utils.types import AnalysisResult, FieldKind, failed, skipped, succeeded

logger = logging.getLogger(__name__)

KIND = "ordinal_regression"
_FIT_WARNINGS = (ConvergenceWarning, HessianInversionWarning, RuntimeWarning)


def _fit_with_retry(model: OrderedModel) -> tuple[object, list[str]]:
    """Fit once; if the optimizer warns, refit once with warnings suppressed."""
    notes = []
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = model.fit(method="bfgs", maxiter=1000, disp=False)

    warned = [w for w in caught if issubclass(w.category, _FIT_WARNINGS)]
    converged = result.mle_retvals.get("converged", True)
    if not warned and converged:
        return result, notes

    first_message = str(warned[0].message) if warned else "optimizer did not converge"
    logger.info("Ordinal fit warned (%s); retrying with warnings suppressed", first_message)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        result = model.fit(
            start_params=np.asarray(result.params), method="bfgs", maxiter=5000, disp=False,
        )
    notes.append(f"First fit warned ({first_message}); refitted once with warnings suppressed")
    if not result.mle_retvals.get("converged", True):
        notes.append("Optimizer still reports non-convergence after the refit")
    return result, notes


def _hessian_inference(model: OrderedModel, params: np.ndarray) -> tuple[np.ndarray, list[str]]:
    """Standard errors from the numerical Hessian of the log-likelihood at the optimum."""
    notes = []
    hessian = approx_hess(params, model.loglike)
    try:
        covariance = np.linalg.inv(-hessian)
    except np.linalg.LinAlgError:
        notes.append("Hessian is singular; standard errors are unavailable")
        return np.full(len(params), np.nan), notes

    variances = np.diag(covariance)
    if np.any(variances <= 0):
        notes.append("Hessian is not negative definite for some parameters; their standard errors are missing")
    with np.errstate(invalid="ignore"):
        se = np.where(variances > 0, np.sqrt(np.abs(variances)), np.nan)
    return se, notes


def fit_ordinal(
    dataset: AnalyticalDataset,
    spec: ModelSpec,
    settings: StatsSettings = StatsSettings(),
) -> AnalysisResult:
    """Proportional-odds logit model over the full ordered label set of the outcome.

    Reports log-odds coefficients with odds ratios, the category cut-points,
    and significance computed from an independent Hessian evaluation rather
    than the optimizer's own covariance estimate.
    """
    prepared = prepare_model_data(dataset, spec, {FieldKind.ORDINAL})
    headline = f"Ordinal logistic regression: {spec.outcome} ~ {' + '.join(prepared.predictors) or '(none)'}"

    reason = insufficiency(prepared, spec.outcome)
    if reason:
        return skipped(spec.name, KIND, headline, f"cannot fit: {reason}")

    frame = prepared.frame
    endog = frame[spec.outcome].cat.remove_unused_categories()
    design, notes = design_matrix(frame, prepared.predictors)
    if prepared.absent:
        notes.append(f"Predictors not in dataset: {list(prepared.absent)}")
    if design.shape[1] == 0:
        return skipped(spec.name, KIND, headline, "cannot fit: no predictor varies within the complete cases")
    if not is_full_rank(design):
        return failed(spec.name, KIND, headline, "model could not be fitted: singular design matrix")

    try:
        model = OrderedModel(endog, design, distr="logit")
        result, fit_notes = _fit_with_retry(model)
    except (np.linalg.LinAlgError, ValueError) as exc:
        logger.warning("%s: ordinal fit failed: %s", spec.name, exc)
        return failed(spec.name, KIND, headline, f"model could not be fitted: {exc}")
    notes.extend(fit_notes)

    params = np.asarray(result.params, dtype=float)
    if not np.all(np.isfinite(params)):
        return failed(spec.name, KIND, headline, "model could not be fitted: non-finite estimates")

    se, inference_notes = _hessian_inference(model, params)
    notes.extend(inference_notes)
    names = list(result.params.index)
    with np.errstate(divide="ignore", invalid="ignore"):
        z = params / se
    p_values = 2 * stats.norm.sf(np.abs(z))

    k_exog = design.shape[1]
    critical = stats.norm.ppf(1 - (1 - settings.confidence_level) / 2)
    coefficients = pd.DataFrame(
        {
            "term": names[:k_exog],
            "log_odds": params[:k_exog],
            "std_err": se[:k_exog],
            "z": z[:k_exog],
            "p_value": p_values[:k_exog],
            "odds_ratio": np.exp(params[:k_exog]),
            "or_ci_lower": np.exp(params[:k_exog] - critical * se[:k_exog]),
            "or_ci_upper": np.exp(params[:k_exog] + critical * se[:k_exog]),
        }
    )

    levels = list(endog.cat.categories)
    cutpoints = model.transform_threshold_params(params)[1:-1]
    thresholds = pd.DataFrame(
        {
            "boundary": [f"{lower} | {upper}" for lower, upper in zip(levels[:-1], levels[1:])],
            "cutpoint": cutpoints,
            "raw_param": params[k_exog:],
            "raw_std_err": se[k_exog:],
        }
    )

    naive = pd.DataFrame(
        {
            "term": names,
            "estimate": params,
            "optimizer_std_err": np.asarray(result.bse, dtype=float),
        }
    )

    significant = coefficients.loc[coefficients["p_value"] < settings.alpha, "term"].tolist()
    return succeeded(
        spec.name,
        KIND,
        headline,
        table=coefficients,
        statistics={
            "n": int(len(frame)),
            "levels": " < ".join(str(level) for level in levels),
            "log_likelihood": float(result.llf),
            "aic": float(result.aic),
            "dropped_rows": prepared.dropped_rows,
            "significant_terms": ", ".join(significant) or "none",
            "interpretation": (
                f"{len(significant)} of {k_exog} predictor term(s) significantly shift the odds of a "
                f"higher {spec.outcome} category (alpha = {settings.alpha})."
            ),
        },
        notes=notes,
        extra_tables={"cut-points": thresholds, "optimizer output": naive},
    )
