"""Shared fixtures: small synthetic HR exports with realistic structure."""

import numpy as np
import pandas as pd
import pytest

from people_analytics.config import (
    EDUCATION_ORDER,
    RATING_ORDER,
    SATISFACTION_ORDER,
    AnalysisConfig,
    LevelOrders,
    StatsSettings,
)
from people_analytics.domains.workforce.dataset import AnalyticalDataset, build_dataset
from people_analytics.domains.workforce.ingest import SourceTables

N_EMPLOYEES = 160
N_REVIEWED = 130

DEPARTMENTS = ["Sales", "Technology", "Human Resources"]
ROLES = ["Sales Executive", "Software Engineer", "Data Scientist", "Recruiter"]
TRAVEL = ["No Travel", "Some Travel", "Frequent Traveller"]


def _lookup_frame(code_column: str, label_column: str, labels: tuple[str, ...]) -> pd.DataFrame:
    return pd.DataFrame({code_column: range(1, len(labels) + 1), label_column: list(labels)})


def make_lookups() -> dict[str, pd.DataFrame]:
    return {
        "education": _lookup_frame("education_level_id", "education_level", EDUCATION_ORDER),
        "satisfaction": _lookup_frame("satisfaction_id", "satisfaction_level", SATISFACTION_ORDER),
        "rating": _lookup_frame("rating_id", "rating_level", RATING_ORDER),
    }


def make_employees(n: int = N_EMPLOYEES, seed: int = 7) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    over_time = rng.choice(["Yes", "No"], size=n, p=[0.3, 0.7])
    salary = rng.normal(90_000, 25_000, size=n).round(0).clip(30_000, None)
    age = rng.integers(22, 60, size=n)
    # Leaving is more likely with overtime and lower pay, never deterministic
    logit = -1.4 + 1.3 * (over_time == "Yes") - 0.00002 * (salary - 90_000) - 0.03 * (age - 40)
    attrition = np.where(rng.random(n) < 1 / (1 + np.exp(-logit)), "Yes", "No")
    years_at_company = rng.integers(0, 11, size=n)

    return pd.DataFrame(
        {
            "employee_id": [f"E{i:04d}" for i in range(1, n + 1)],
            "first_name": [f"First{i}" for i in range(n)],
            "last_name": [f"Last{i}" for i in range(n)],
            "gender": rng.choice(["Female", "Male", "Non-Binary"], size=n, p=[0.45, 0.45, 0.1]),
            "age": age,
            "business_travel": rng.choice(TRAVEL, size=n),
            "department": rng.choice(DEPARTMENTS, size=n),
            "distance_from_home_km": rng.integers(1, 45, size=n),
            "state": rng.choice(["CA", "NY", "IL"], size=n),
            "ethnicity": rng.choice(["White", "Black", "Asian", "Mixed"], size=n),
            "education": rng.integers(1, 6, size=n),
            "education_field": rng.choice(["Business", "Computer Science", "Economics"], size=n),
            "job_role": rng.choice(ROLES, size=n),
            "marital_status": rng.choice(["Single", "Married", "Divorced"], size=n),
            "salary": salary,
            "stock_option_level": rng.integers(0, 4, size=n),
            "over_time": over_time,
            "hire_date": pd.Timestamp("2023-12-31") - pd.to_timedelta(years_at_company * 365, unit="D"),
            "attrition": attrition,
            "years_at_company": years_at_company,
            "years_in_most_recent_role": np.minimum(years_at_company, rng.integers(0, 6, size=n)),
            "years_since_last_promotion": np.minimum(years_at_company, rng.integers(0, 8, size=n)),
            "years_with_curr_manager": np.minimum(years_at_company, rng.integers(0, 6, size=n)),
        }
    )


def make_reviews(employee_ids: list[str], seed: int = 11) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []
    review_id = 1
    for emp_id in employee_ids:
        for visit in range(int(rng.integers(1, 4))):
            self_rating = int(rng.integers(2, 6))
            manager_rating = int(np.clip(self_rating + rng.integers(-1, 2), 1, 5))
            job_satisfaction = int(rng.integers(1, 6))
            rows.append(
                {
                    "performance_id": f"PR{review_id:05d}",
                    "employee_id": emp_id,
                    "review_date": pd.Timestamp("2020-03-01") + pd.DateOffset(years=visit),
                    "environment_satisfaction": int(rng.integers(1, 6)),
                    "job_satisfaction": job_satisfaction,
                    "relationship_satisfaction": int(rng.integers(1, 6)),
                    "training_opportunities_within_year": int(rng.integers(1, 4)),
                    "training_opportunities_taken": int(rng.integers(0, 4)),
                    "work_life_balance": int(np.clip(job_satisfaction + rng.integers(-1, 2), 1, 5)),
                    "self_rating": self_rating,
                    "manager_rating": manager_rating,
                }
            )
            review_id += 1
    return pd.DataFrame(rows)


@pytest.fixture
def orders() -> LevelOrders:
    return LevelOrders()


@pytest.fixture
def lookup_frames() -> dict[str, pd.DataFrame]:
    return make_lookups()


@pytest.fixture
def employees() -> pd.DataFrame:
    return make_employees()


@pytest.fixture
def reviews(employees) -> pd.DataFrame:
    return make_reviews(employees["employee_id"].head(N_REVIEWED).tolist())


@pytest.fixture
def sources(employees, reviews, lookup_frames) -> SourceTables:
    return SourceTables(employees=employees, performance=reviews, lookups=lookup_frames)


@pytest.fixture
def dataset(sources, orders):
    return build_dataset(sources, orders)


@pytest.fixture
def settings() -> StatsSettings:
    return StatsSettings(n_simulations=200, random_seed=123)


@pytest.fixture
def config(tmp_path, settings) -> AnalysisConfig:
    return AnalysisConfig(data_dir=tmp_path, stats=settings)


def dataset_from(frame: pd.DataFrame):
    """Analytical dataset over an already typed frame, for targeted statistical tests."""
    return AnalyticalDataset(frame=frame, lookups={}, employee_count=len(frame), reviewed_count=len(frame))


def write_sources(directory, employees, reviews, lookups) -> None:
    """Write source tables with the original export headers."""
    employees.rename(
        columns={
            "employee_id": "EmployeeID",
            "first_name": "FirstName",
            "last_name": "LastName",
            "business_travel": "BusinessTravel",
            "distance_from_home_km": "DistanceFromHome (KM)",
            "education_field": "EducationField",
            "job_role": "JobRole",
            "marital_status": "MaritalStatus",
            "stock_option_level": "StockOptionLevel",
            "over_time": "OverTime",
            "hire_date": "HireDate",
            "years_at_company": "YearsAtCompany",
            "years_in_most_recent_role": "YearsInMostRecentRole",
            "years_since_last_promotion": "YearsSinceLastPromotion",
            "years_with_curr_manager": "YearsWithCurrManager",
        }
    ).to_csv(directory / "Employee.csv", index=False)
    reviews.rename(
        columns={
            "performance_id": "PerformanceID",
            "employee_id": "EmployeeID",
            "review_date": "ReviewDate",
            "environment_satisfaction": "EnvironmentSatisfaction",
            "job_satisfaction": "JobSatisfaction",
            "relationship_satisfaction": "RelationshipSatisfaction",
            "training_opportunities_within_year": "TrainingOpportunitiesWithinYear",
            "training_opportunities_taken": "TrainingOpportunitiesTaken",
            "work_life_balance": "WorkLifeBalance",
            "self_rating": "SelfRating",
            "manager_rating": "ManagerRating",
        }
    ).to_csv(directory / "PerformanceRating.csv", index=False)
    lookups["education"].rename(
        columns={"education_level_id": "EducationLevelID", "education_level": "EducationLevel"}
    ).to_csv(directory / "EducationLevel.csv", index=False)
    lookups["satisfaction"].rename(
        columns={"satisfaction_id": "SatisfactionID", "satisfaction_level": "SatisfactionLevel"}
    ).to_csv(directory / "SatisfiedLevel.csv", index=False)
    lookups["rating"].rename(
        columns={"rating_id": "RatingID", "rating_level": "RatingLevel"}
    ).to_csv(directory / "RatingLevel.csv", index=False)
