"""Tests for reading the source exports from disk."""

import pandas as pd
import pytest

from conftest import N_EMPLOYEES, dataset_from, make_employees, make_lookups, make_reviews, write_sources
from people_analytics.config import AnalysisConfig, SourceFiles
from people_analytics.domains import workforce
from people_analytics.domains.workforce.ingest import ingest_sources
from people_analytics.utils.io import write_output
from people_analytics.utils.transforms import normalize_columns, to_snake_case


@pytest.fixture
def data_dir(tmp_path):
    employees = make_employees()
    write_sources(tmp_path, employees, make_reviews(employees["employee_id"].head(100).tolist()), make_lookups())
    return tmp_path


class TestColumnNames:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("EmployeeID", "employee_id"),
            ("DistanceFromHome (KM)", "distance_from_home_km"),
            ("YearsWithCurrManager", "years_with_curr_manager"),
            ("OverTime", "over_time"),
            ("EducationLevelID", "education_level_id"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_to_snake_case(self, raw, expected):
        assert to_snake_case(raw) == expected

    def test_mapping_applied_after_normalization(self):
        df = normalize_columns(pd.DataFrame(columns=["DistanceFromHome"]), {"distance_from_home": "distance_from_home_km"})
        assert list(df.columns) == ["distance_from_home_km"]


class TestIngest:
    def test_reads_and_normalizes_all_tables(self, data_dir):
        sources = ingest_sources(data_dir, SourceFiles())
        assert len(sources.employees) == N_EMPLOYEES
        assert "distance_from_home_km" in sources.employees.columns
        assert "review_date" in sources.performance.columns
        assert set(sources.lookups) == {"education", "satisfaction", "rating"}
        assert list(sources.lookups["satisfaction"].columns) == ["satisfaction_id", "satisfaction_level"]

    def test_missing_files_reported_together(self, tmp_path):
        with pytest.raises(FileNotFoundError) as exc:
            ingest_sources(tmp_path, SourceFiles())
        assert "Employee.csv" in str(exc.value)
        assert "RatingLevel.csv" in str(exc.value)

    def test_dry_run_only_checks_presence(self, data_dir):
        sources = ingest_sources(data_dir, SourceFiles(), dry_run=True)
        assert sources.employees.empty

    def test_semicolon_delimited_exports(self, tmp_path):
        employees = make_employees(n=20)
        reviews = make_reviews(employees["employee_id"].tolist())
        write_sources(tmp_path, employees, reviews, make_lookups())
        for path in tmp_path.glob("*.csv"):
            pd.read_csv(path).to_csv(path, sep=";", index=False)
        sources = ingest_sources(tmp_path, SourceFiles(delimiter=";"))
        assert len(sources.employees) == 20


class TestWorkforceDomain:
    def test_validate_ok(self, data_dir):
        assert workforce.validate(AnalysisConfig(data_dir=data_dir))["status"] == "ok"

    def test_validate_reports_missing_files(self, tmp_path):
        result = workforce.validate(AnalysisConfig(data_dir=tmp_path))
        assert result["status"] == "error"
        assert "missing" in result["message"]

    def test_validate_flags_out_of_range_codes(self, data_dir):
        path = data_dir / "PerformanceRating.csv"
        reviews = pd.read_csv(path)
        reviews.loc[0, "ManagerRating"] = 9
        reviews.to_csv(path, index=False)
        result = workforce.validate(AnalysisConfig(data_dir=data_dir))
        assert result["status"] == "error"
        assert "manager_rating" in result["message"]

    def test_validate_checks_presence_before_reading(self, data_dir, monkeypatch):
        calls = []
        ingest = workforce.ingest_sources

        def spy(data_dir, sources, dry_run=False):
            calls.append(dry_run)
            return ingest(data_dir, sources, dry_run=dry_run)

        monkeypatch.setattr(workforce, "ingest_sources", spy)
        assert workforce.validate(AnalysisConfig(data_dir=data_dir))["status"] == "ok"
        assert calls == [True, False]

    def test_validate_dataset_accepts_built_table(self, dataset):
        assert workforce.validate_dataset(dataset)["valid"]

    def test_validate_dataset_flags_duplicate_ids(self, dataset):
        frame = pd.concat([dataset.frame, dataset.frame.head(1)], ignore_index=True)
        outcome = workforce.validate_dataset(dataset_from(frame))
        assert not outcome["valid"]
        assert any("employee_id" in err for err in outcome["errors"])

    def test_run_builds_dataset(self, data_dir):
        dataset = workforce.run(AnalysisConfig(data_dir=data_dir))
        assert dataset.employee_count == N_EMPLOYEES
        assert dataset.reviewed_count == 100
        assert str(dataset.frame["review_date"].dtype).startswith("datetime64")

    def test_export_round_trip_keeps_rows(self, data_dir, tmp_path):
        dataset = workforce.run(AnalysisConfig(data_dir=data_dir))
        path = write_output(dataset.frame, tmp_path / "out" / "dataset.csv")
        assert len(pd.read_csv(path)) == N_EMPLOYEES
