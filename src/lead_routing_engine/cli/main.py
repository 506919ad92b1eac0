"""Main CLI entry point for the leadroute command."""

import json
import logging
import click
from pathlib import Path
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from typing import Optional

from pydantic import ValidationError

from ..config import settings
from ..core.config import DEFAULT_WEIGHTS, ScoringConfigManager
from ..core.scorer import LeadScorer
from ..routing.engine import LeadRoutingEngine
from ..routing.rules import default_routing_rules
from ..schemas.lead import LeadSubmission
from ..storage import load_routing_rules, load_team_members, save_routing_rules, save_team_members
from ..team.defaults import default_team_members

console = Console()

PRIORITY_COLORS = {"critical": "red", "high": "yellow", "medium": "blue", "low": "dim"}


def get_engine(roster_path: Optional[str] = None, rules_path: Optional[str] = None) -> LeadRoutingEngine:
    """Build an engine from roster/rule files, falling back to the defaults."""
    roster_path = roster_path or settings.roster_path
    rules_path = rules_path or settings.rules_path
    members = load_team_members(roster_path) if roster_path else []
    rules = load_routing_rules(rules_path) if rules_path else []
    return LeadRoutingEngine(members, rules)


def get_scorer() -> LeadScorer:
    """Build a scorer from the persisted scoring config."""
    return LeadScorer(ScoringConfigManager(settings.scoring_config_path).config)


def read_submission(path: str) -> LeadSubmission:
    with open(path, 'r') as f:
        data = json.load(f)
    try:
        return LeadSubmission.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid lead file:[/red]\n{e}")
        raise SystemExit(1)


@click.group()
@click.version_option(version="1.0.0", prog_name="leadroute")
@click.option("--verbose", "-v", is_flag=True, help="Show routing debug logs")
def cli(verbose: bool):
    """Lead Routing Engine - score inquiries and assign them to the sales team.

    \b
    Quick Start:
      leadroute score lead.json                  # Show score breakdown
      leadroute route lead.json                  # Score and assign a lead
      leadroute workload                         # Team utilization
      leadroute export-defaults ./config         # Editable roster and rules
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("lead_file", type=click.Path(exists=True))
def score(lead_file: str):
    """Score a lead JSON file."""
    submission = read_submission(lead_file)
    lead = submission.to_lead_dict()
    scorer = get_scorer()
    breakdown = scorer.calculate(lead, submission.behavior_summary())

    table = Table(title=(
        f"Lead Score: {breakdown.total} ({scorer.temperature(breakdown.total).upper()}, "
        f"{scorer.lead_priority(breakdown.total)} priority)"
    ))
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Reason")

    for key, detail in breakdown.details.items():
        table.add_row(key, f"{detail.score:g}", detail.reason)

    console.print(table)

    categories = Table(title="Categories")
    categories.add_column("Category")
    categories.add_column("Score", justify="right")
    for name in ("profile", "behavior", "engagement", "urgency", "company", "project"):
        categories.add_row(name, f"{getattr(breakdown, name):g}")
    console.print(categories)

    prediction = scorer.predict_conversion(lead, breakdown)
    console.print(Panel.fit(
        f"Probability: [bold]{prediction.probability:.0%}[/bold]   "
        f"Confidence: {prediction.confidence:.0%}\n"
        f"Expected close: {prediction.time_to_conversion} days\n"
        f"Estimated value: ${prediction.estimated_value:,}\n\n"
        f"[green]+[/green] {', '.join(prediction.positive_factors) or '(none)'}\n"
        f"[red]-[/red] {', '.join(prediction.negative_factors) or '(none)'}",
        title="Conversion Prediction"
    ))


@cli.command()
@click.argument("lead_file", type=click.Path(exists=True))
@click.option("--roster", "roster_path", type=click.Path(exists=True), help="Team roster JSON")
@click.option("--rules", "rules_path", type=click.Path(exists=True), help="Routing rules JSON")
@click.option("--json", "as_json", is_flag=True, help="Print the decision as JSON")
def route(lead_file: str, roster_path: Optional[str], rules_path: Optional[str], as_json: bool):
    """Score a lead JSON file and assign it to a team member."""
    submission = read_submission(lead_file)
    lead = submission.to_lead_dict()
    breakdown = get_scorer().calculate(lead, submission.behavior_summary())

    engine = get_engine(roster_path, rules_path)
    decision = engine.route_lead(lead, breakdown)

    if as_json:
        click.echo(json.dumps(decision.to_dict(), indent=2))
        return

    color = PRIORITY_COLORS.get(decision.priority.value, "")
    assignee = "[red]Unassigned - escalate to dispatcher[/red]"
    if decision.assigned_to:
        member = engine.directory.get_member(decision.assigned_to)
        assignee = f"[cyan]{member.name}[/cyan] ({decision.team_name})"

    reasons = "\n".join(f"• {r}" for r in decision.reasoning) or "(none)"
    alternatives = ", ".join(decision.alternative_assignees) or "(none)"

    console.print(Panel.fit(
        f"Assigned to: {assignee}\n"
        f"Priority: [{color}]{decision.priority.value}[/{color}]   "
        f"Score: {breakdown.total}   Confidence: {decision.confidence:.0%}\n"
        f"Estimated response: {decision.estimated_response_time} min\n\n"
        f"[bold]Approach:[/bold] {decision.recommended_approach}\n\n"
        f"[bold]Reasoning:[/bold]\n{reasons}\n\n"
        f"[dim]Alternatives: {alternatives}[/dim]",
        title=f"Routing Decision - {lead.get('name') or lead.get('email') or 'lead'}"
    ))


@cli.command()
@click.option("--roster", "roster_path", type=click.Path(exists=True), help="Team roster JSON")
def workload(roster_path: Optional[str]):
    """Show team member utilization."""
    engine = get_engine(roster_path)

    table = Table(title="Team Workload")
    table.add_column("Member", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Utilization", justify="right", style="bold")
    table.add_column("Availability", justify="center")

    availability_colors = {"available": "green", "busy": "yellow", "unavailable": "red"}

    for row in engine.get_team_member_workload():
        style = availability_colors.get(row["availability"], "")
        table.add_row(
            row["memberId"],
            row["name"],
            f"{row['utilization']:.0%}",
            f"[{style}]{row['availability']}[/{style}]",
        )

    console.print(table)


@cli.command()
@click.option("--roster", "roster_path", type=click.Path(exists=True), help="Team roster JSON")
@click.option("--rules", "rules_path", type=click.Path(exists=True), help="Routing rules JSON")
def stats(roster_path: Optional[str], rules_path: Optional[str]):
    """Show routing statistics."""
    engine = get_engine(roster_path, rules_path)
    data = engine.get_routing_statistics()

    console.print(Panel.fit(
        f"Rules: [bold]{data['activeRules']}[/bold] active of {data['totalRules']}\n"
        f"Team: [bold]{data['availableMembers']}[/bold] available of {data['teamMembers']}\n"
        f"Average utilization: [bold]{data['averageUtilization']:.0%}[/bold]",
        title="Routing Statistics"
    ))


@cli.command("export-defaults")
@click.argument("directory", type=click.Path(file_okay=False))
def export_defaults(directory: str):
    """Write the built-in roster and rules as editable JSON files."""
    out = Path(directory)
    save_team_members(default_team_members(), out / "roster.json")
    save_routing_rules(default_routing_rules(), out / "rules.json")
    console.print(f"[green]✓ Wrote {out / 'roster.json'} and {out / 'rules.json'}[/green]")
    console.print("[dim]Point LEAD_ENGINE_ROSTER_PATH / LEAD_ENGINE_RULES_PATH at them to use them.[/dim]")


# ============================================================================
# SCORING CONFIG
# ============================================================================

@cli.group()
def config():
    """Inspect and edit the persisted scoring config."""
    pass


@config.command("show")
def config_show():
    """Show weights, thresholds and conversion factors."""
    manager = ScoringConfigManager(settings.scoring_config_path)
    scoring = manager.config

    table = Table(title="Category Weights")
    table.add_column("Category")
    table.add_column("Weight", justify="right")
    for category, weight in scoring.weights.items():
        table.add_row(category, f"{weight:.2f}")
    console.print(table)

    console.print(
        f"Thresholds: hot >= {scoring.hot_threshold}, warm >= {scoring.warm_threshold}, "
        f"cold >= {scoring.cold_threshold}"
    )

    factors = Table(title="Conversion Factors")
    factors.add_column("Factor")
    factors.add_column("Multiplier", justify="right")
    for factor, multiplier in sorted(scoring.conversion_factors.items()):
        factors.add_row(factor, f"{multiplier:g}")
    console.print(factors)
    console.print(f"[dim]{manager.config_path}[/dim]")


@config.command("set-weight")
@click.argument("category", type=click.Choice(list(DEFAULT_WEIGHTS)))
@click.argument("weight", type=click.FloatRange(0, 1))
def config_set_weight(category: str, weight: float):
    """Set the weight of a score category."""
    manager = ScoringConfigManager(settings.scoring_config_path)
    manager.set_weight(category, weight)

    total = sum(manager.config.weights.values())
    console.print(f"[green]✓ {category} weight set to {weight:.2f}[/green]")
    if abs(total - 1.0) > 0.001:
        console.print(f"[yellow]Weights now add up to {total:.2f}, not 1.00[/yellow]")


@config.command("set-thresholds")
@click.argument("hot", type=click.IntRange(0, 100))
@click.argument("warm", type=click.IntRange(0, 100))
@click.argument("cold", type=click.IntRange(0, 100))
def config_set_thresholds(hot: int, warm: int, cold: int):
    """Set the hot, warm and cold score thresholds."""
    if not hot >= warm >= cold:
        raise click.BadParameter("expected HOT >= WARM >= COLD")
    ScoringConfigManager(settings.scoring_config_path).update_thresholds(hot, warm, cold)
    console.print(f"[green]✓ Thresholds set to {hot}/{warm}/{cold}[/green]")


@config.command("set-industry")
@click.argument("industry")
@click.argument("points", type=click.IntRange(0, 100))
def config_set_industry(industry: str, points: int):
    """Set the company-category points of an industry."""
    ScoringConfigManager(settings.scoring_config_path).set_industry_score(industry, points)
    console.print(f"[green]✓ {industry} now scores {points}[/green]")


@config.command("set-factor")
@click.argument("factor")
@click.argument("multiplier", type=click.FloatRange(0, min_open=True))
def config_set_factor(factor: str, multiplier: float):
    """Set a conversion factor multiplier, e.g. industry_mining 1.5."""
    ScoringConfigManager(settings.scoring_config_path).set_conversion_factor(factor, multiplier)
    console.print(f"[green]✓ {factor} multiplier set to {multiplier:g}[/green]")


if __name__ == "__main__":
    cli()
