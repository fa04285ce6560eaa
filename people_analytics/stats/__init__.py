"""Statistical tests and models run against the analytical dataset."""

from people_analytics.stats.anova import run_anova
from people_analytics.stats.comparisons import assess_association, compare_numeric
from people_analytics.stats.correlation import correlate
from people_analytics.stats.descriptives import attrition_rate_by, summarize_numeric
from people_analytics.stats.logistic import fit_logistic
from people_analytics.stats.ordinal import fit_ordinal
from people_analytics.stats.specs import AnovaSpec, ComparisonSpec, ModelSpec
