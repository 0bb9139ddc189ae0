"""CLI entry point for meetextract."""

from __future__ import annotations

import logging
import os
import subprocess

import click

from meetextract.config import Config, ensure_config_file
from meetextract.models import ExtractionOptions


@click.group()
@click.option("--backend", type=click.Choice(["openai", "ollama"]), default=None, help="Model backend.")
@click.option("--model", default=None, help="Model name (e.g. gpt-4o-mini, mistral).")
@click.option("--host", default=None, help="Backend base URL (OpenAI-compatible server or Ollama).")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    backend: str | None,
    model: str | None,
    host: str | None,
    verbose: bool,
) -> None:
    """Extract summaries, decisions, and action items from meeting notes."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    config = Config.load()

    # Apply CLI overrides
    if backend:
        config.model.backend = backend
    if model:
        config.model.model = model
    if host is not None:
        config.model.host = host

    ctx.obj["config"] = config


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--text", "-t", default=None, help="Meeting notes given inline instead of a file.")
@click.option("--no-summary", is_flag=True, help="Leave the summary out.")
@click.option("--no-decisions", is_flag=True, help="Leave decisions out.")
@click.option("--no-action-items", is_flag=True, help="Leave action items out.")
@click.option("--summary-length", type=int, default=None, help="Summary length in sentences (1-10).")
@click.option("--format", "output_format", type=click.Choice(["json", "markdown"]), default=None, help="Output format.")
@click.option("--output", "-o", "output_file", type=click.Path(dir_okay=False), default=None, help="Write to a file.")
@click.pass_context
def extract(
    ctx: click.Context,
    file: str | None,
    text: str | None,
    no_summary: bool,
    no_decisions: bool,
    no_action_items: bool,
    summary_length: int | None,
    output_format: str | None,
    output_file: str | None,
) -> None:
    """Extract minutes from a .txt/.md notes file or inline text."""
    if file and text is not None:
        raise click.UsageError("Pass either FILE or --text, not both.")
    if not file and text is None:
        raise click.UsageError("Provide meeting notes as FILE or with --text.")

    config = ctx.obj["config"]
    if output_format:
        config.output.format = output_format

    defaults = config.extraction.to_options()
    options = ExtractionOptions(
        include_summary=defaults.include_summary and not no_summary,
        include_decisions=defaults.include_decisions and not no_decisions,
        include_action_items=defaults.include_action_items and not no_action_items,
        max_summary_length=summary_length if summary_length is not None else defaults.max_summary_length,
    )

    from meetextract.pipeline import run_extract
    run_extract(config, text=text, notes_file=file, options=options, output_file=output_file)


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Check that the configured model backend is reachable."""
    from meetextract.pipeline import run_check
    run_check(ctx.obj["config"])


@cli.command("config")
def config_cmd() -> None:
    """Open the configuration file in your editor."""
    path = ensure_config_file()
    editor = os.environ.get("EDITOR", "nano")
    click.echo(f"Opening {path} with {editor}...")
    subprocess.run([editor, str(path)])
