"""Plain-language significance statements for report headlines."""

import math


def format_p(p_value: float) -> str:
    if p_value is None or math.isnan(p_value):
        return "p = n/a"
    if p_value < 0.001:
        return "p < 0.001"
    return f"p = {p_value:.3f}"


def significance_statement(p_value: float, alpha: float, subject: str) -> str:
    """``subject`` completes "There is (no) statistically significant ..."."""
    if p_value is None or math.isnan(p_value):
        return f"Significance of the {subject} could not be determined."
    if p_value < alpha:
        return f"There is a statistically significant {subject} ({format_p(p_value)}, alpha = {alpha})."
    return f"There is no statistically significant {subject} ({format_p(p_value)}, alpha = {alpha})."
