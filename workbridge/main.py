"""Command-line front end: score an application-form record stored as JSON."""

import argparse
import json
import logging
import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .intake import assess, build_submission
from .models import Assessment

console = Console()

BAND_STYLES = {"success": "bold green", "warning": "yellow", "error": "red"}


def load_form(path: Path) -> dict:
    """Read a form record from *path*; the file must hold a JSON object."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


def display_profile(assessment: Assessment) -> None:
    """Display the parsed candidate profile."""
    profile = assessment.profile
    parts = [
        f"[bold]Job category:[/bold] {assessment.job_category or '(none)'}",
        f"[bold]Date of birth:[/bold] {profile.date_of_birth or '(not provided)'}",
        f"[bold]Experience:[/bold] {profile.experience_years} years",
        f"[bold]Worked abroad:[/bold] {profile.worked_abroad.value}",
        f"[bold]Certificate:[/bold] {profile.has_certificate.value}",
        f"[bold]Languages:[/bold] {', '.join(sorted(profile.languages)) or '(none)'}",
        f"[bold]Passport expiry:[/bold] {profile.passport_expiry_date or '(not provided)'}",
    ]
    console.print(Panel("\n".join(parts), title="Candidate Profile", border_style="blue"))
    console.print()


def display_score(assessment: Assessment) -> None:
    """Display the Auto-Score breakdown in a table."""
    breakdown = assessment.breakdown
    style = BAND_STYLES[assessment.band]

    table = Table(
        title=f"Auto-Score: [{style}]{breakdown.total}[/{style}]/100",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Factor", style="white")
    table.add_column("Points", justify="right", style="cyan")
    table.add_column("Max", justify="right", style="dim")
    table.add_column("Detail", style="dim", max_width=50)

    for factor in breakdown.factors:
        table.add_row(factor.name, str(factor.points), str(factor.max_points), factor.detail)

    console.print(table)
    if breakdown.raw_total > breakdown.total:
        console.print(f"[dim]Uncapped total: {breakdown.raw_total}[/dim]")
    console.print()


def display_routing(assessment: Assessment) -> None:
    """Display the routing decision."""
    routing = assessment.routing
    text = "\n".join(
        [
            f"[bold]Route:[/bold] {routing.route}",
            f"[bold]Priority:[/bold] {routing.priority}",
            f"[bold]Processing stream:[/bold] {routing.processing_stream}",
            f"[bold]Estimated timeline:[/bold] {routing.estimated_timeline}",
            f"[bold]Country:[/bold] {routing.country_tag}",
        ]
    )
    console.print(Panel(text, title="Routing", border_style="green"))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the WorkBridge CLI."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="WorkBridge: Auto-Score and routing for skilled-worker applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  workbridge application.json
  workbridge application.json --now 2026-02-20
  workbridge application.json --submission
        """,
    )
    parser.add_argument("form_path", type=Path, help="Path to a JSON file holding the form record")
    parser.add_argument(
        "--now",
        type=date.fromisoformat,
        default=None,
        help="Evaluation date as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--submission",
        action="store_true",
        help="Print the enriched submission payload as JSON",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else os.getenv("WORKBRIDGE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
    )

    try:
        form = load_form(args.form_path)

        if args.submission:
            now = None
            if args.now is not None:
                now = datetime(args.now.year, args.now.month, args.now.day, tzinfo=timezone.utc)
            payload = build_submission(form, now)
            console.print_json(json.dumps(payload, ensure_ascii=False))
            return 0

        assessment = assess(form, args.now)
        console.print()
        display_profile(assessment)
        display_score(assessment)
        display_routing(assessment)
        return 0

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Invalid form:[/red] {e}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        return 130


def cli():
    """CLI entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
