"""Validate triage rules: load YAML, print the effective values."""

from rich.table import Table

from inbox_triage.config import TRIAGE_RULES_PATH
from inbox_triage.engine.rules import load_rules

from .shared import console, logger


def validate_config() -> None:
    """Load config/triage.yaml (or TRIAGE_RULES_PATH) and print a summary table."""
    log = logger.bind(command="validate-config", path=str(TRIAGE_RULES_PATH))
    log.info("validate_config.start")

    try:
        rules = load_rules(TRIAGE_RULES_PATH)
    except ValueError as e:
        console.print(f"[red]Config error: {e}[/red]")
        log.error("validate_config.fail", error=str(e))
        raise SystemExit(1) from e

    if not TRIAGE_RULES_PATH.exists():
        console.print(f"[yellow]{TRIAGE_RULES_PATH} not found; using built-in defaults.[/yellow]")

    table = Table(title="Triage rules")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("portal domains", ", ".join(rules.portal_domains))
    table.add_row("subject prefixes", ", ".join(rules.subject_prefixes))
    table.add_row("SLA minutes (portal / standard)", f"{rules.sla.portal} / {rules.sla.standard}")
    table.add_row("due-soon window (h)", str(rules.due_soon_hours))
    table.add_row("high budget (EUR)", f"{rules.high_budget_eur:,}")
    table.add_row("priority thresholds (high / medium)", f"{rules.thresholds.high} / {rules.thresholds.medium}")
    table.add_row("actionable keywords", ", ".join(rules.actionable_keywords))
    table.add_row("urgency keywords", ", ".join(rules.urgency_keywords))
    for name, points in rules.weights.model_dump().items():
        table.add_row(f"weight: {name}", str(points))

    console.print(table)
    console.print("[green]Config valid.[/green]")
    log.info("validate_config.ok")
