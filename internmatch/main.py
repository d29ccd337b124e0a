"""internmatch CLI - rule-based internship matching."""

import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from internmatch.config import DEFAULT_TOP_N, SKILL_CATALOG_PATH
from internmatch.fixtures import MOCK_INTERNSHIPS, MOCK_STUDENTS
from internmatch.loaders import load_internship, load_internships, load_profile, load_weights
from internmatch.matching.evaluator import evaluate_internship_match
from internmatch.matching.ranker import rank_internships
from internmatch.schemas.match import DEFAULT_MATCH_WEIGHTS, InternshipMatchResult, RankedInternship
from internmatch.services.report_service import build_matching_report_model
from internmatch.skills.catalog import load_skill_catalog, normalize_skills
from internmatch.utils import configure_logging

app = typer.Typer(help="internmatch - Explainable internship matching for students")
console = Console()


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to LOG_LEVEL env var)"
    ),
) -> None:
    configure_logging(log_level.upper() if log_level else None)


@app.command()
def evaluate(
    internship: Path = typer.Option(
        ..., "--internship", "-i", help="Path to internship JSON file"
    ),
    profile: Path = typer.Option(..., "--profile", "-p", help="Path to student profile JSON"),
    weights: Path | None = typer.Option(
        None, "--weights", "-w", help="Path to weight overrides JSON"
    ),
    explain: bool = typer.Option(
        False, "--explain", help="Include the per-signal breakdown"
    ),
    output_json: bool = typer.Option(
        False, "--json", help="Output result as JSON instead of pretty format"
    ),
) -> None:
    """Evaluate one internship against one student profile."""
    try:
        listing = load_internship(internship)
        student = load_profile(profile)
        match_weights = load_weights(weights)

        result = evaluate_internship_match(listing, student, match_weights, explain=explain)

        if output_json:
            _output_json(result.model_dump(mode="json"))
        else:
            _print_match(title=listing.title or listing.id, match=result, index=None)

    except Exception as e:
        console.print(f"[red]Error evaluating match: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def rank(
    internships: Path = typer.Option(
        ..., "--internships", "-i", help="Path to internships JSON file"
    ),
    profile: Path = typer.Option(..., "--profile", "-p", help="Path to student profile JSON"),
    weights: Path | None = typer.Option(
        None, "--weights", "-w", help="Path to weight overrides JSON"
    ),
    top_n: int = typer.Option(
        DEFAULT_TOP_N, "--top-n", "-n", help="Number of top matches to return"
    ),
    explain: bool = typer.Option(
        False, "--explain", help="Include per-signal breakdowns"
    ),
    output_json: bool = typer.Option(
        False, "--json", help="Output results as JSON instead of pretty format"
    ),
) -> None:
    """Rank internships for a student, best match first."""
    try:
        listings = load_internships(internships)
        student = load_profile(profile)
        match_weights = load_weights(weights)

        ranked = rank_internships(
            listings, student, match_weights, explain=explain, top_n=top_n
        )

        if output_json:
            _output_json([item.model_dump(mode="json") for item in ranked])
        else:
            _output_pretty(ranked, total=len(listings))

    except Exception as e:
        console.print(f"[red]Error ranking internships: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def sanity() -> None:
    """Rank the built-in sample internships for each sample student."""
    console.print("[bold cyan]Matching sanity check[/bold cyan]")
    console.print(f"Weights: {DEFAULT_MATCH_WEIGHTS.model_dump()}")

    for student in MOCK_STUDENTS:
        console.print(f"\n[bold]=== {student.name} ===[/bold]")

        ranked = rank_internships(MOCK_INTERNSHIPS, student.profile)
        for i, item in enumerate(ranked, start=1):
            console.print(f"{i}. {item.internship.title or item.internship.id}")
            console.print(f"   score={item.match.score:.2f}")
            if item.match.reasons:
                console.print(f"   reasons: {' | '.join(item.match.reasons[:2])}")
            if item.match.gaps:
                console.print(f"   gaps: {' | '.join(item.match.gaps)}")

        excluded = [
            (internship, evaluate_internship_match(internship, student.profile))
            for internship in MOCK_INTERNSHIPS
        ]
        excluded = [(internship, match) for internship, match in excluded if not match.eligible]
        if excluded:
            console.print("   [yellow]excluded by hard filters:[/yellow]")
            for internship, match in excluded:
                console.print(
                    f"   - {internship.title or internship.id}: {'; '.join(match.gaps)}"
                )


@app.command()
def report(
    output_json: bool = typer.Option(
        False, "--json", help="Output the full report as JSON"
    ),
) -> None:
    """Show how matching scores listings, with a sample breakdown."""
    try:
        model = build_matching_report_model()

        if output_json:
            _output_json(model.model_dump(mode="json"))
            return

        summary = model.summary
        console.print(
            f"[bold cyan]Matching {summary.matching_version}[/bold cyan] "
            f"(max score {summary.max_score:g}; {summary.normalization_formula})\n"
        )

        table = Table(title="Signals")
        table.add_column("Signal", style="cyan")
        table.add_column("Weight", style="green", justify="right")
        table.add_column("Definition")
        for key in summary.signal_keys:
            table.add_row(
                key.value,
                f"{summary.weights.weight_for(key):g}",
                summary.signal_definitions[key],
            )
        console.print(table)

        sample = model.sample
        console.print(
            f"\n[bold]Sample:[/bold] {sample.student_label} -> {sample.internship_label}"
        )
        _print_match(title=sample.internship_label, match=sample.match, index=None)

    except Exception as e:
        console.print(f"[red]Error building report: {e}[/red]")
        raise typer.Exit(1)


@app.command(name="normalize-skills")
def normalize_skills_command(
    skills: list[str] = typer.Argument(..., help="Skill labels to normalize"),
    catalog: Path = typer.Option(
        SKILL_CATALOG_PATH, "--catalog", "-c", help="Path to skill catalog JSON"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Map free-text skill labels to canonical skill IDs."""
    try:
        skill_catalog = load_skill_catalog(catalog)
        result = normalize_skills(skills, skill_catalog)

        if output_json:
            _output_json({"skill_ids": result.skill_ids, "unknown": result.unknown})
            return

        console.print(f"[green]Skill IDs:[/green] {', '.join(result.skill_ids) or '-'}")
        console.print(f"[yellow]Unknown:[/yellow] {', '.join(result.unknown) or '-'}")

    except Exception as e:
        console.print(f"[red]Error normalizing skills: {e}[/red]")
        raise typer.Exit(1)


def _output_json(payload: object) -> None:
    """Output a JSON-ready payload to stdout."""
    json.dump(obj=payload, fp=sys.stdout, indent=2)
    sys.stdout.write("\n")


def _output_pretty(ranked: list[RankedInternship], total: int) -> None:
    """Output ranked matches in pretty console format."""
    if not ranked:
        console.print("[yellow]No internships passed the eligibility filters.[/yellow]")
        return

    console.print(
        f"\n[bold green]{len(ranked)} of {total} internships matched![/bold green]\n"
    )
    for i, item in enumerate(ranked, start=1):
        _print_match(
            title=item.internship.title or item.internship.id, match=item.match, index=i
        )


def _print_match(title: str, match: InternshipMatchResult, index: int | None) -> None:
    header = f"[bold]#{index} {title}[/bold]" if index else f"[bold]{title}[/bold]"

    content = []
    if match.eligible:
        content.append(
            f"[cyan]Match Score:[/cyan] {match.score:g} / {match.max_score:g} "
            f"({match.normalized_score:.1%})"
        )
    else:
        content.append("[red]Not eligible[/red]")

    if match.reasons:
        content.append("\n[cyan]Why it's a match:[/cyan]")
        for reason in match.reasons:
            content.append(f"  • {reason}")

    if match.gaps:
        content.append("\n[yellow]Gaps:[/yellow]")
        for gap in match.gaps:
            content.append(f"  • {gap}")

    if match.breakdown and match.breakdown.per_signal_contributions:
        content.append("\n[cyan]Breakdown:[/cyan]")
        for row in match.breakdown.per_signal_contributions:
            content.append(
                f"  {row.signal_key.value}: {row.points_awarded:g} / {row.weight:g}"
                f" (raw {row.raw_match_value:g})"
            )

    panel = Panel(
        renderable="\n".join(content),
        title=header,
        border_style="green" if match.eligible else "red",
    )
    console.print(panel)


if __name__ == "__main__":
    app()
