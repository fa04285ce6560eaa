"""Binary logistic regression for the attrition outcome."""

import logging
import warnings

import numpy as np
import pandas as pd
import statsmodels.api as sm
from statsmodels.tools.sm_exceptions import (
    ConvergenceWarning,
    PerfectSeparationError,
    PerfectSeparationWarning,
)

from people_analytics.config import StatsSettings
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.stats.interpret import significance_statement
from people_analytics.stats.specs import (
    ModelSpec,
    design_matrix,
    insufficiency,
    is_full_rank,
    prepare_model_data,
)
from people_analytics.utils.types import AnalysisResult, FieldKind, failed, skipped, succeeded

logger = logging.getLogger(__name__)

KIND = "logistic_regression"


def _coefficient_table(result, confidence_level: float) -> pd.DataFrame:
    conf = result.conf_int(alpha=1 - confidence_level)
    table = pd.DataFrame(
        {
            "term": result.params.index,
            "coef": result.params.to_numpy(),
            "std_err": result.bse.to_numpy(),
            "z": result.tvalues.to_numpy(),
            "p_value": result.pvalues.to_numpy(),
            "odds_ratio": np.exp(result.params.to_numpy()),
            "or_ci_lower": np.exp(conf[0].to_numpy()),
            "or_ci_upper": np.exp(conf[1].to_numpy()),
        }
    )
    return table.reset_index(drop=True)


def fit_logistic(
    dataset: AnalyticalDataset,
    spec: ModelSpec,
    settings: StatsSettings = StatsSettings(),
) -> AnalysisResult:
    """Maximum-likelihood logistic fit of a binary outcome on the declared predictors.

    Odds ratios express the odds of the outcome's positive level ("Yes" for
    attrition) relative to its reference level.
    """
    prepared = prepare_model_data(dataset, spec, {FieldKind.BINARY})
    headline = f"Logistic regression: {spec.outcome} ~ {' + '.join(prepared.predictors) or '(none)'}"

    reason = insufficiency(prepared, spec.outcome)
    if reason:
        return skipped(spec.name, KIND, headline, reason)

    frame = prepared.frame
    outcome = frame[spec.outcome]
    reference, positive = list(outcome.cat.categories)
    y = (outcome == positive).astype(float)

    design, notes = design_matrix(frame, prepared.predictors)
    if prepared.absent:
        notes.append(f"Predictors not in dataset: {list(prepared.absent)}")
    if design.shape[1] == 0:
        return skipped(spec.name, KIND, headline, "no predictor varies within the complete cases")

    exog = sm.add_constant(design, has_constant="add")
    if not is_full_rank(exog):
        return failed(spec.name, KIND, headline, "model could not be fitted: singular design matrix")

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = sm.Logit(y, exog).fit(disp=False, maxiter=200)
    except (PerfectSeparationError, np.linalg.LinAlgError, ValueError) as exc:
        logger.warning("%s: logistic fit failed: %s", spec.name, exc)
        return failed(spec.name, KIND, headline, f"model could not be fitted: {exc}")

    categories = {type(w.message) for w in caught}
    if any(issubclass(c, PerfectSeparationWarning) for c in categories):
        return failed(spec.name, KIND, headline, "model could not be fitted: perfect separation detected")
    if not np.all(np.isfinite(result.bse)):
        return failed(spec.name, KIND, headline, "model could not be fitted: non-finite standard errors")
    if any(issubclass(c, ConvergenceWarning) for c in categories) or not result.mle_retvals.get("converged", True):
        notes.append("Optimizer reported a convergence warning; estimates may be unstable")

    table = _coefficient_table(result, settings.confidence_level)
    significant = table.loc[(table["term"] != "const") & (table["p_value"] < settings.alpha), "term"].tolist()

    return succeeded(
        spec.name,
        KIND,
        f"{headline} (odds of '{positive}' vs '{reference}')",
        table=table,
        statistics={
            "n": int(result.nobs),
            "events": int(y.sum()),
            "aic": float(result.aic),
            "pseudo_r2": float(result.prsquared),
            "llr_p_value": float(result.llr_pvalue),
            "dropped_rows": prepared.dropped_rows,
            "significant_terms": ", ".join(significant) or "none",
            "interpretation": significance_statement(
                float(result.llr_pvalue), settings.alpha,
                f"improvement over the intercept-only model for {spec.outcome}",
            ),
        },
        notes=notes,
    )
