"""Crew Coach CLI - run a coaching crew from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from crew_coach.config import CrewCoachConfig
from crew_coach.crew.coordinator import CrewCoordinator
from crew_coach.crew.registry import available_domains, get_crew
from crew_coach.models import CompletionMode, GoalDomain


console = Console()


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def parse_value(raw: str) -> Any:
    """Coerce a KEY=VALUE string: int, then float, then true/false, else str."""
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            pass
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    return raw


def parse_context(pairs: list[str] | None, json_path: str | None = None) -> dict[str, Any]:
    context: dict[str, Any] = {}
    if json_path:
        with open(json_path) as f:
            context.update(json.load(f))
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Context must be KEY=VALUE, got: {pair}")
        context[key.strip()] = parse_value(value.strip())
    return context


def _on_event(event_type: str, **kwargs: Any) -> None:
    if event_type == "agent_complete":
        response = kwargs["data"]
        console.print(f"[dim]Agent {kwargs['index'] + 1}/{kwargs['total']} done:[/dim] {response.agent}")
    elif event_type == "crew_fallback":
        console.print(f"[yellow]Using fallback crew ({kwargs.get('reason')})[/yellow]")


def cmd_run(args: argparse.Namespace) -> None:
    """Run a crew for one query."""
    setup_logging(args.log_level)

    config = CrewCoachConfig.from_env()
    try:
        context = parse_context(args.context, args.context_json)
    except (OSError, ValueError, argparse.ArgumentTypeError) as e:
        console.print(f"[red]Invalid context:[/red] {e}")
        sys.exit(2)

    coordinator = CrewCoordinator(config, emit=_on_event)
    mode = coordinator.mode

    console.print(f"\n[bold]Crew:[/bold] {args.domain}")
    console.print(f"[bold]Query:[/bold] {args.query}")
    if mode == CompletionMode.LIVE:
        console.print(f"[bold]Provider:[/bold] {config.llm.provider} ({config.llm.model})\n")
    else:
        console.print("[bold]Provider:[/bold] [yellow]not configured, fallback mode[/yellow]\n")

    execution = coordinator.execute(args.domain, args.query, context)

    for r in execution.results:
        console.print(Panel(
            Markdown(r.response),
            title=f"{r.agent} (confidence {r.confidence:.2f})",
            border_style="blue",
        ))

    console.print(Panel(Markdown(execution.final_output), title="Crew Plan", border_style="green"))

    table = Table(title="Crew Summary")
    table.add_column("Agent", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Recommendations", justify="right")
    table.add_column("Insights", justify="right")
    for r in execution.results:
        table.add_row(r.agent, f"{r.confidence:.2f}", str(len(r.recommendations)), str(len(r.insights)))
    console.print(table)
    console.print(f"Mode: {execution.mode.value} | Duration: {execution.execution_time_ms:.0f}ms")

    if args.output_json:
        with open(args.output_json, "w") as f:
            f.write(execution.model_dump_json(indent=2))
        console.print(f"\nResult saved to {args.output_json}")


def cmd_crews(args: argparse.Namespace) -> None:
    """Show the configured crews."""
    for domain in available_domains():
        crew = get_crew(domain)
        table = Table(title=f"{domain.value} ({crew.process.value})")
        table.add_column("#", justify="right")
        table.add_column("Agent", style="cyan")
        table.add_column("Task")
        for i, task in enumerate(crew.tasks, start=1):
            table.add_row(str(i), crew.agent_for(task).role, task.description)
        console.print(table)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="crew-coach",
        description="Crew Coach: multi-agent sleep and activity coaching",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run a coaching crew")
    run_parser.add_argument("domain", choices=[d.value for d in GoalDomain], help="Goal domain")
    run_parser.add_argument("query", help="User question for the crew")
    run_parser.add_argument("--context", action="append", metavar="KEY=VALUE", help="Context field (repeatable)")
    run_parser.add_argument("--context-json", help="JSON file with context fields")
    run_parser.add_argument("--log-level", default="WARNING", help="Logging level")
    run_parser.add_argument("--output-json", help="Save result to JSON file")
    run_parser.set_defaults(func=cmd_run)

    crews_parser = subparsers.add_parser("crews", help="List crews and their tasks")
    crews_parser.set_defaults(func=cmd_crews)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
