"""Command line interface for chatting through workflow playbooks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from flowpilot.catalog import WorkflowCatalog, get_catalog
from flowpilot.config import FlowpilotConfig, load_config
from flowpilot.formatting import render_history, render_workflow_details
from flowpilot.interpreter import interpret
from flowpilot.session import ChatSession

app = typer.Typer(help="CLI for the flowpilot workflow copilot")

# Command groups
workflow_app = typer.Typer(help="Commands for inspecting the workflow catalog")

app.add_typer(workflow_app, name="workflow")

EXIT_COMMANDS = {"exit", "quit"}


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, help="Path to a flowpilot YAML config file"
    ),
) -> None:
    """Flowpilot CLI entry point."""
    try:
        settings = load_config(str(config) if config else None)
    except ValueError as exc:
        typer.secho(f"Invalid configuration: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    logging.basicConfig(level=settings.log_level.upper())
    ctx.obj = settings


def _load_catalog(ctx: typer.Context, path: Optional[Path]) -> WorkflowCatalog:
    settings: FlowpilotConfig = ctx.obj or load_config()
    try:
        return get_catalog(path=str(path) if path else None, config=settings)
    except (OSError, ValueError) as exc:
        typer.secho(f"Could not load workflow catalog: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _print_replies(messages) -> None:
    for message in messages:
        typer.echo(message.content)
        typer.echo("")


@app.command("chat")
def chat(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Option(None, help="YAML workflow catalog"),
) -> None:
    """
    Start an interactive conversation with the copilot.

    Each line you type is interpreted as a command against the active run.
    Type "history" to list recently closed runs and "exit" or "quit" to leave.

    Example:
        flowpilot chat
        flowpilot chat --catalog ./playbooks.yaml
    """
    settings: FlowpilotConfig = ctx.obj or load_config()
    session = ChatSession(
        catalog=_load_catalog(ctx, catalog), history_limit=settings.history_limit
    )
    _print_replies(session.messages)

    while True:
        typer.secho(
            "Try: " + " | ".join(session.quick_actions), fg=typer.colors.BRIGHT_BLACK
        )
        try:
            text = typer.prompt("you", default="", show_default=False)
        except typer.Abort:
            break

        command = text.strip().lower()
        if command in EXIT_COMMANDS:
            break
        if command == "history":
            typer.echo(render_history(session.history))
            typer.echo("")
            continue

        result = session.send(text)
        if result is not None:
            _print_replies(result.replies)

    typer.echo("Goodbye!")


@app.command("ask")
def ask(
    ctx: typer.Context,
    text: List[str] = typer.Argument(..., help="Command to interpret"),
    catalog: Optional[Path] = typer.Option(None, help="YAML workflow catalog"),
) -> None:
    """Interpret a single command with no active run and print the reply."""
    result = interpret(" ".join(text), None, catalog=_load_catalog(ctx, catalog))
    for message in result.replies:
        typer.echo(message.content)


@workflow_app.command("list")
def workflow_list(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Option(None, help="YAML workflow catalog"),
) -> None:
    """List catalog workflows as tab-separated id, name, and step count."""
    for wf in _load_catalog(ctx, catalog).list_all():
        typer.echo(f"{wf.id}\t{wf.name}\t{len(wf.steps)} steps")


@workflow_app.command("show")
def workflow_show(
    ctx: typer.Context,
    workflow_id: str,
    catalog: Optional[Path] = typer.Option(None, help="YAML workflow catalog"),
) -> None:
    """
    Show the full playbook for a workflow.

    Args:
        workflow_id: Catalog id, e.g. incident-response

    Example:
        flowpilot workflow show incident-response
    """
    wf = _load_catalog(ctx, catalog).get(workflow_id)
    if wf is None:
        typer.echo("Workflow not found")
        raise typer.Exit(code=1)
    typer.echo(render_workflow_details(wf))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
