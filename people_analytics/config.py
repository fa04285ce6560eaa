"""Analysis configuration and environment setup."""

from dataclasses import dataclass, field, replace
from pathlib import Path

from people_analytics.utils.io import load_toml_config
from people_analytics.utils.types import ConfigurationError

type ConfigValue = str | int | float | bool | list[str]
type ConfigDict = dict[str, ConfigValue | dict[str, ConfigValue]]

# Label orders are supplied here rather than inferred from lookup codes
EDUCATION_ORDER = (
    "No Formal Qualifications",
    "High School",
    "Bachelors",
    "Masters",
    "Doctorate",
)
SATISFACTION_ORDER = (
    "Very Dissatisfied",
    "Dissatisfied",
    "Neutral",
    "Satisfied",
    "Very Satisfied",
)
RATING_ORDER = (
    "Unacceptable",
    "Needs Improvement",
    "Meets Expectation",
    "Exceeds Expectation",
    "Above and Beyond",
)
STOCK_OPTION_ORDER = (0, 1, 2, 3)

ANALYSIS_DOMAINS = ("attrition", "performance", "satisfaction")


@dataclass(frozen=True)
class SourceFiles:
    employees: str = "Employee.csv"
    performance: str = "PerformanceRating.csv"
    education_levels: str = "EducationLevel.csv"
    satisfaction_levels: str = "SatisfiedLevel.csv"
    rating_levels: str = "RatingLevel.csv"
    delimiter: str = ","


@dataclass(frozen=True)
class StatsSettings:
    alpha: float = 0.05
    confidence_level: float = 0.95
    n_simulations: int = 2000
    random_seed: int = 20240501
    min_expected_count: float = 5.0


@dataclass(frozen=True)
class LevelOrders:
    education: tuple[str, ...] = EDUCATION_ORDER
    satisfaction: tuple[str, ...] = SATISFACTION_ORDER
    rating: tuple[str, ...] = RATING_ORDER
    stock_option: tuple[int, ...] = STOCK_OPTION_ORDER


@dataclass(frozen=True)
class AnalysisConfig:
    data_dir: Path
    sources: SourceFiles = field(default_factory=SourceFiles)
    stats: StatsSettings = field(default_factory=StatsSettings)
    orders: LevelOrders = field(default_factory=LevelOrders)
    domains: tuple[str, ...] = ANALYSIS_DOMAINS


def _apply_section(section: object, values: dict[str, ConfigValue], name: str) -> object:
    try:
        coerced = {
            key: tuple(val) if isinstance(val, list) else val
            for key, val in values.items()
        }
        return replace(section, **coerced)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid [{name}] setting: {exc}") from exc


def apply_overrides(config: AnalysisConfig, overrides: ConfigDict) -> AnalysisConfig:
    """Layer user-supplied settings over a base configuration."""
    for key, value in overrides.items():
        match key, value:
            case "data_dir", str() | Path():
                config = replace(config, data_dir=Path(value))
            case "sources" | "stats" | "orders", dict():
                section = _apply_section(getattr(config, key), value, key)
                config = replace(config, **{key: section})
            case "domains", list():
                unknown = set(value) - set(ANALYSIS_DOMAINS)
                if unknown:
                    raise ConfigurationError(f"Unknown analysis domains: {sorted(unknown)}")
                config = replace(config, domains=tuple(value))
            case "env", _:
                continue
            case other, _:
                raise ConfigurationError(f"Unknown configuration key: {other}")

    if not 0 < config.stats.alpha < 1:
        raise ConfigurationError(f"alpha must be in (0, 1), got {config.stats.alpha}")
    if not 0 < config.stats.confidence_level < 1:
        raise ConfigurationError(
            f"confidence_level must be in (0, 1), got {config.stats.confidence_level}"
        )
    if config.stats.n_simulations < 1:
        raise ConfigurationError("n_simulations must be positive")
    return config


def load_analysis_config(
    env: str = "production",
    overrides: ConfigDict | None = None,
) -> AnalysisConfig:
    match env:
        case "production":
            config = AnalysisConfig(data_dir=Path("data/raw/hr"))
        case "development":
            config = AnalysisConfig(
                data_dir=Path("data/sample/hr"),
                stats=StatsSettings(n_simulations=500),
            )
        case other:
            raise ValueError(f"Unknown environment: {other}")

    if overrides:
        config = apply_overrides(config, overrides)
    return config


def get_env_config(pyproject: Path | None = None) -> ConfigDict:
    """Read analysis settings from the [tool.people_analytics] table of pyproject.toml."""
    pyproject = pyproject or Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject.exists():
        return {}
    data = load_toml_config(pyproject)
    return data.get("tool", {}).get("people_analytics", {})
