"""CLI for the Mobility Advisor.

Ranks mobility solutions and classifies governance models for a wizard
selection against a content snapshot.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from content_catalog.loader import save_snapshot, validate_snapshot
from content_catalog.mock_data import mock_snapshot

from .app_logging import setup_logging
from .config import find_config_file, load_config, save_default_config
from .engine import AdvisorEngine
from .schema import (
    GovernanceClassification,
    PickupPreference,
    SolutionRanking,
    WizardSelection,
)

console = Console()


@click.group()
@click.version_option(version="1.0.0", prog_name="mobility-advisor")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True),
    help="Path to advisor-config.yaml (default: auto-discovered)"
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for diagnostic output"
)
def main(config_path: Optional[str], log_level: str):
    """Mobility Advisor for business parks.

    Ranks collective transport solutions against the park's motivations and
    classifies governance models for a chosen implementation variant.
    """
    setup_logging(log_level)
    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


def snapshot_option(f):
    return click.option(
        "--snapshot", "-s",
        help="Content snapshot file or HTTPS URL (default: bundled mock content)"
    )(f)


def selection_option(f):
    return click.option(
        "--selection", "-x",
        type=click.Path(exists=True),
        help="Wizard selection JSON/YAML file"
    )(f)


@main.command("rank")
@snapshot_option
@selection_option
@click.option("--reason", "-r", multiple=True, help="Active reason id (repeatable)")
@click.option("--traffic", "-t", multiple=True, help="Traffic type of the park (repeatable)")
@click.option(
    "--pickup", "-p",
    type=click.Choice([p.value for p in PickupPreference]),
    help="Employee pickup preference"
)
@click.option("--out", "-o", type=click.Path(), help="Output file for JSON results")
@click.option("--json-output", "-j", is_flag=True, help="Output raw JSON instead of formatted text")
@click.option("--verbose", "-v", is_flag=True, help="Show per-reason contributions")
def rank_cmd(
    snapshot: Optional[str],
    selection: Optional[str],
    reason: tuple,
    traffic: tuple,
    pickup: Optional[str],
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Rank mobility solutions for the selected reasons.

    Examples:
        mobility-advisor rank -r reason-1 -r reason-2
        mobility-advisor rank -s snapshot.json -t woon-werkverkeer -p thuis
        mobility-advisor rank -x selection.yaml -j
    """
    try:
        engine = AdvisorEngine.from_source(snapshot)
        wizard_selection = build_selection(selection, reason, traffic, pickup)
        ranking = engine.rank_solutions(wizard_selection)

        if json_output:
            output_json(ranking.model_dump(mode="json"), out)
        else:
            display_ranking(ranking, engine, verbose)
            if out:
                output_json(ranking.model_dump(mode="json"), out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("governance")
@snapshot_option
@selection_option
@click.option(
    "--variant", "-V",
    multiple=True,
    help="Chosen variant per solution (format: solution_id=variation_id, repeatable)"
)
@click.option("--solution", help="Classify from a solution's own governance references")
@click.option("--current", "-c", "current_model", help="Current governance model id of the park")
@click.option("--out", "-o", type=click.Path(), help="Output file for JSON results")
@click.option("--json-output", "-j", is_flag=True, help="Output raw JSON instead of formatted text")
def governance_cmd(
    snapshot: Optional[str],
    selection: Optional[str],
    variant: tuple,
    solution: Optional[str],
    current_model: Optional[str],
    out: Optional[str],
    json_output: bool,
):
    """Classify governance models for the chosen implementation variants.

    Examples:
        mobility-advisor governance -V solution-4=variation-1 -c governance-2
        mobility-advisor governance --solution solution-4
        mobility-advisor governance -x selection.yaml -j
    """
    try:
        engine = AdvisorEngine.from_source(snapshot)
        wizard_selection = build_selection(selection)

        for item in variant:
            if "=" not in item:
                raise click.BadParameter(f"Expected solution_id=variation_id, got '{item}'")
            solution_id, variation_id = (part.strip() for part in item.split("=", 1))
            if solution_id not in wizard_selection.selected_solutions:
                wizard_selection.selected_solutions.append(solution_id)
            wizard_selection.selected_variants[solution_id] = variation_id or None

        if current_model:
            wizard_selection.current_governance_model_id = current_model

        if solution:
            classification = engine.classify_for_solution(
                solution, wizard_selection.current_governance_model_id
            )
        else:
            classification = engine.classify_governance(wizard_selection)

        if json_output:
            output_json(classification.model_dump(mode="json"), out)
        else:
            display_classification(classification)
            if out:
                output_json(classification.model_dump(mode="json"), out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--snapshot", "-s",
    required=True,
    type=click.Path(),
    help="Path to a content snapshot file"
)
def validate_cmd(snapshot: str):
    """Validate a content snapshot file.

    Structural problems fail validation; reference problems are listed as
    warnings.
    """
    is_valid, issues = validate_snapshot(snapshot)
    if is_valid:
        console.print(f"[green]✓ Snapshot valid: {snapshot}[/green]")
        for issue in issues:
            console.print(f"  [yellow]•[/yellow] {issue}")
    else:
        console.print(f"[red]✗ Snapshot invalid: {snapshot}[/red]")
        for issue in issues:
            console.print(f"  - {issue}")

    sys.exit(0 if is_valid else 1)


@main.command("inspect")
@snapshot_option
@click.option("--id", "solution_id", help="Show details for a specific solution id")
def inspect_cmd(snapshot: Optional[str], solution_id: Optional[str]):
    """Inspect the content snapshot."""
    try:
        engine = AdvisorEngine.from_source(snapshot)
        repo = engine.repository
        snap = repo.snapshot

        console.print(f"\n[bold blue]Content Snapshot[/bold blue]")
        console.print(f"Source: {snap.source} (version {snap.version})")
        console.print(
            f"Reasons: {len(repo.reasons)} | Solutions: {len(repo.solutions)} | "
            f"Governance models: {len(repo.governance_models)} | "
            f"Variations: {len(repo.implementation_variations)}"
        )
        console.print()

        if solution_id:
            display_solution_detail(repo.require_solution(solution_id), engine)
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title")
        table.add_column("Category")
        table.add_column("Traffic types")
        table.add_column("Variations", justify="right")

        for sol in repo.solutions:
            table.add_row(
                sol.id,
                sol.title[:40],
                sol.category or "-",
                ", ".join(t.value for t in sol.type_vervoer),
                str(len(repo.get_variations_for_solution(sol.id))),
            )
        console.print(table)

        issues = engine.content_issues()
        if issues:
            console.print(f"\n[yellow]⚠ {len(issues)} content issues[/yellow]")
            for issue in issues:
                console.print(f"  [dim]• {issue}[/dim]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("init-config")
@click.argument("path", type=click.Path(), default="advisor-config.yaml")
def init_config_cmd(path: str):
    """Write the default configuration to PATH."""
    save_default_config(Path(path))
    console.print(f"[green]Default configuration written to {path}[/green]")


@main.command("export-mock")
@click.argument("path", type=click.Path())
def export_mock_cmd(path: str):
    """Write the bundled mock content as a snapshot file to PATH."""
    save_snapshot(mock_snapshot(), Path(path))
    console.print(f"[green]Mock snapshot written to {path}[/green]")


def build_selection(
    selection_path: Optional[str],
    reasons: tuple = (),
    traffic: tuple = (),
    pickup: Optional[str] = None,
) -> WizardSelection:
    """Load a selection file (if any) and apply command-line overrides."""
    data = {}
    if selection_path:
        with open(selection_path, "r", encoding="utf-8") as f:
            if selection_path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

    if not isinstance(data, dict):
        raise click.BadParameter(f"Selection file must contain a mapping: {selection_path}")

    if reasons:
        data["selected_reasons"] = list(reasons)
    if traffic or pickup:
        info = dict(data.get("business_park_info") or {})
        if traffic:
            info["traffic_types"] = list(traffic)
        if pickup:
            info["employee_pickup_preference"] = pickup
        data["business_park_info"] = info
    return WizardSelection.model_validate(data)


def output_json(data: dict, out: Optional[str]):
    """Write JSON to a file, or to stdout when no file is given."""
    text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    if out:
        Path(out).write_text(text, encoding="utf-8")
    else:
        click.echo(text)


def display_ranking(ranking: SolutionRanking, engine: AdvisorEngine, verbose: bool):
    """Display ranked solutions grouped by category."""
    reason_titles = {r.id: r.title for r in engine.repository.reasons}

    active = ", ".join(reason_titles.get(rid, rid) for rid in ranking.active_reason_ids) or "none"
    console.print(Panel(
        f"Active reasons: [cyan]{active}[/cyan]\n"
        f"Solutions: {len(ranking.ordered)} in {len(ranking.grouped)} categories",
        title="Solution Ranking",
    ))

    if ranking.used_fallback:
        console.print("[yellow]⚠ No solution matches the selected reasons; showing all solutions.[/yellow]")

    if not ranking.ordered:
        console.print("[dim]No solutions available.[/dim]")
        return

    position = 0
    for category, items in ranking.grouped.items():
        console.print(f"\n[bold]{category}[/bold]")
        for item in items:
            position += 1
            pickup = "[green]✓[/green]" if item.pickup_match else "[red]✗[/red]"
            console.print(
                f"  [bold cyan]{position}. {item.solution.title}[/bold cyan] "
                f"score [bold]{item.score:g}[/bold] | traffic {item.traffic_match} | pickup {pickup}"
            )
            if verbose:
                for reason_id, contribution in item.contributing_reasons.items():
                    console.print(f"     [dim]{reason_titles.get(reason_id, reason_id)}: {contribution:g}[/dim]")


def display_classification(classification: GovernanceClassification):
    """Display governance tiers, with the current model shown separately."""
    current = classification.current_model
    if current:
        status = (
            "[green]recommended for this variant[/green]"
            if classification.current_model_is_recommended
            else f"[yellow]{classification.tier_of(current.id)}[/yellow]"
        )
        console.print(Panel(
            f"[bold]{current.title}[/bold]\n{status}",
            title="Current governance model",
        ))

    if classification.active_variation_id:
        console.print(f"Active variation: [cyan]{classification.active_variation_id}[/cyan]\n")
    else:
        console.print("[dim]No implementation variation selected.[/dim]\n")

    labels = {
        "recommended": "[green]Aanbevolen[/green]",
        "conditional": "[cyan]Aanbevolen, mits[/cyan]",
        "unsuitable": "[red]Ongeschikt[/red]",
        "other": "[dim]Overige modellen[/dim]",
    }
    for tier, models in classification.display_buckets().items():
        if not models:
            continue
        console.print(labels[tier])
        for model in models:
            console.print(f"  • {model.title} [dim]({model.id})[/dim]")
            note = classification.variant_notes.get(model.id)
            if note:
                console.print(f"    [dim]{note}[/dim]")
        console.print()

    if classification.dangling_references:
        console.print(
            f"[yellow]⚠ Unknown governance model references: "
            f"{', '.join(classification.dangling_references)}[/yellow]"
        )


def display_solution_detail(solution, engine: AdvisorEngine):
    """Display detailed solution information."""
    tree = Tree(f"[bold cyan]{solution.title}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {solution.id}")
    identity.add(f"Category: {solution.category or '-'}")
    if solution.costs:
        identity.add(f"Costs: {solution.costs}")
    if solution.implementation_time:
        identity.add(f"Implementation time: {solution.implementation_time}")

    if solution.type_vervoer:
        traffic = tree.add("[bold]Traffic types[/bold]")
        for t in solution.type_vervoer:
            traffic.add(t.value)

    if solution.ophalen:
        pickup = tree.add("[bold]Pickup options[/bold]")
        for option in solution.ophalen:
            pickup.add(option)

    scores = tree.add("[bold]Reason scores[/bold]")
    for reason in engine.repository.reasons:
        if reason.identifier:
            value = engine.registry.value(solution, reason.identifier)
            scores.add(f"{reason.title}: {value:g}")

    variations = engine.repository.get_variations_for_solution(solution.id)
    if variations:
        branch = tree.add("[bold]Implementation variations[/bold]")
        for variation in variations:
            branch.add(f"{variation.title} [dim]({variation.id})[/dim]")

    console.print(tree)


if __name__ == "__main__":
    main()
