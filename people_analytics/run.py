"""Main analysis runner: builds the workforce dataset and executes each analysis domain."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from people_analytics.config import (
    AnalysisConfig,
    ConfigDict,
    get_env_config,
    load_analysis_config,
)
from people_analytics.domains import attrition, performance, satisfaction, workforce
from people_analytics.domains.workforce.dataset import AnalyticalDataset
from people_analytics.report import render_result, render_summary
from people_analytics.utils.io import write_output
from people_analytics.utils.types import AnalysisResult, ConfigurationError

type DomainResult = dict[str, bool | str | int]

logger = logging.getLogger(__name__)

console = Console()

DOMAINS = {
    "attrition": attrition,
    "performance": performance,
    "satisfaction": satisfaction,
}

PROJECT_ROOT = Path(__file__).parent.parent


def load_config(path: Path | None = None) -> ConfigDict:
    config_path = path or PROJECT_ROOT / "people_analytics.yaml"
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    if path is not None:
        raise FileNotFoundError(f"Config file not found: {path}")

    return get_env_config(PROJECT_ROOT / "pyproject.toml")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def validate_all(config: AnalysisConfig) -> list[DomainResult]:
    results = []
    match workforce.validate(config):
        case {"status": "ok", **rest}:
            results.append({"domain": "workforce", "valid": True, **rest})
        case {"status": "error", "message": msg}:
            return [{"domain": "workforce", "valid": False, "error": msg}]
        case _:
            return [{"domain": "workforce", "valid": False, "error": "Unknown validation result"}]

    try:
        dataset = workforce.run(config)
    except ConfigurationError as exc:
        return [*results, {"domain": "workforce", "valid": False, "error": str(exc)}]

    match workforce.validate_dataset(dataset):
        case {"valid": False, "errors": errs}:
            return [*results, {"domain": "dataset", "valid": False, "error": "; ".join(errs[:3])}]
        case _:
            results.append({"domain": "dataset", "valid": True})

    for name in config.domains:
        match DOMAINS[name].validate(dataset):
            case {"status": "ok", **rest}:
                results.append({"domain": name, "valid": True, **rest})
            case {"status": "error", "message": msg}:
                results.append({"domain": name, "valid": False, "error": msg})
            case {"status": "skipped", "reason": reason}:
                console.print(f"[yellow]Skipping {name}: {reason}[/yellow]")
            case _:
                results.append({"domain": name, "valid": False, "error": "Unknown validation result"})
    return results


def run_domains(
    dataset: AnalyticalDataset,
    config: AnalysisConfig,
    names: tuple[str, ...],
) -> dict[str, list[AnalysisResult]]:
    results = {}
    for name in names:
        console.print(f"\n[cyan]{'=' * 60}[/cyan]")
        console.print(f"[bold cyan]Domain: {name}[/bold cyan]")
        match DOMAINS[name].validate(dataset):
            case {"status": "skipped", "reason": reason}:
                console.print(f"[yellow]Skipping {name}: {reason}[/yellow]")
                continue
            case {"status": "error", "message": msg}:
                # Individual analyses report what they cannot run
                logger.warning("%s: %s", name, msg)

        results[name] = DOMAINS[name].run(dataset, config)
        for result in results[name]:
            render_result(result, console)
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the people analytics pipeline")
    parser.add_argument("--env", default="production", help="Environment preset (production or development)")
    parser.add_argument("--config", type=Path, help="YAML file with analysis settings")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the source CSV exports")
    parser.add_argument("--domain", type=str, help="Run a specific analysis domain only")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't run")
    parser.add_argument("--export", type=Path, help="Write the analytical dataset to a .csv or .json file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        overrides = load_config(args.config)
        if args.data_dir:
            overrides = {**overrides, "data_dir": str(args.data_dir)}
        config = load_analysis_config(args.env, overrides)
    except (ConfigurationError, FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        sys.exit(1)

    if args.validate:
        results = validate_all(config)
        table = Table(title="Validation Results")
        table.add_column("Domain")
        table.add_column("Valid")
        table.add_column("Details")

        for r in results:
            status = "[green]✓[/green]" if r["valid"] else "[red]✗[/red]"
            detail = r.get("error", "OK")
            table.add_row(r["domain"], status, str(detail))

        console.print(table)

        if not all(r["valid"] for r in results):
            sys.exit(1)
        return

    if args.domain and args.domain not in DOMAINS:
        console.print(f"[red]Unknown domain: {args.domain}[/red]")
        sys.exit(1)

    try:
        dataset = workforce.run(config)
    except (ConfigurationError, FileNotFoundError) as exc:
        console.print(f"[red]Could not build the analytical dataset: {exc}[/red]")
        sys.exit(1)

    console.print(
        f"[bold]Analytical dataset: {dataset.employee_count} employees, "
        f"{dataset.reviewed_count} with a performance review[/bold]"
    )
    if args.export:
        write_output(dataset.frame, args.export)

    names = (args.domain,) if args.domain else config.domains
    results = run_domains(dataset, config, names)
    console.print()
    render_summary(results, console)


if __name__ == "__main__":
    main()
