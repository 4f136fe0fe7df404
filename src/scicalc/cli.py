"""Command-line interface for scicalc."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from scicalc import __version__


@click.group()
@click.version_option(version=__version__, prog_name="scicalc")
def main() -> None:
    """scicalc -- single-line scientific expression calculator.

    Evaluates expressions such as ``-2.5 + 3 * sin30 - !4 / 2^3``.
    """


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _load(config_path: str | None, log_dir: str | None) -> dict[str, Any]:
    """Load config and configure the event sink."""
    from scicalc.config import load_config
    from scicalc.logging.events import set_log_dir

    try:
        config = load_config(Path(config_path) if config_path else None)
    except (FileNotFoundError, ValueError, OSError) as e:
        raise click.ClickException(str(e))
    if log_dir is not None:
        config["log_dir"] = log_dir
    set_log_dir(config["log_dir"], fsync=bool(config["logging_fsync"]))
    return config


# ---------------------------------------------------------------------------
# REPL
# ---------------------------------------------------------------------------


@main.command()
@click.option("--config", "config_path", default=None, type=click.Path(), help="Path to scicalc.yaml.")
@click.option("--log-dir", default=None, type=click.Path(), help="Write NDJSON events to this directory.")
@click.option("--no-banner", is_flag=True, help="Skip the feature banner.")
def repl(config_path: str | None, log_dir: str | None, no_banner: bool) -> None:
    """Start an interactive session.  Type 'exit' to quit."""
    from scicalc.repl import CalculatorSession

    config = _load(config_path, log_dir)
    if no_banner:
        config["banner"] = False

    stdin = click.get_text_stream("stdin")

    def read_line(prompt: str) -> str:
        click.echo(prompt, nl=False)
        line = stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    CalculatorSession(config).run(read_line, click.echo)


# ---------------------------------------------------------------------------
# One-shot evaluation
# ---------------------------------------------------------------------------


@main.command("eval")
@click.argument("expression")
@click.option("--config", "config_path", default=None, type=click.Path(), help="Path to scicalc.yaml.")
@click.option("--precision", type=click.IntRange(0, 15), default=None, help="Decimal places in the result.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def eval_cmd(expression: str, config_path: str | None, precision: int | None, as_json: bool) -> None:
    """Evaluate EXPRESSION once and print the result."""
    from scicalc.expression import calculate

    config = _load(config_path, None)
    if precision is None:
        precision = config["precision"]

    result = calculate(expression, max_operands=config["max_operands"])
    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        click.echo(result.display(precision), err=not result.ok)
    if not result.ok:
        sys.exit(1)


# ---------------------------------------------------------------------------
# Reference
# ---------------------------------------------------------------------------


@main.command()
def functions() -> None:
    """List supported operators and functions."""
    from scicalc.functions import binary_symbols, unary_names
    from scicalc.repl import FEATURES, INSTRUCTIONS

    for line in FEATURES:
        click.echo(f"  {line}")
    click.echo("")
    for line in INSTRUCTIONS:
        click.echo(f"  {line}")
    click.echo("")
    click.echo(f"Operators: {' '.join(binary_symbols())}")
    click.echo(f"Functions: {', '.join(unary_names())}")


@main.command("init-config")
@click.argument("directory", default=".", type=click.Path())
def init_config(directory: str) -> None:
    """Write a default scicalc.yaml into DIRECTORY."""
    from scicalc.config import write_default_config

    try:
        target = write_default_config(Path(directory))
    except FileExistsError as e:
        raise click.ClickException(str(e))
    click.echo(f"Created {target}")


@main.command()
@click.argument("log_dir", type=click.Path(exists=True))
@click.option("--level", default=None, help="Filter by level (info, warning, error).")
@click.option("--type", "event_type", default=None, help="Filter by event type.")
@click.option("--session", "session_id", default=None, help="Filter by session id.")
@click.option("--limit", default=50, type=int, help="Maximum number of events.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def events(
    log_dir: str,
    level: str | None,
    event_type: str | None,
    session_id: str | None,
    limit: int,
    as_json: bool,
) -> None:
    """Show logged events from LOG_DIR, newest first."""
    from scicalc.logging.sink import EventSink

    sink = EventSink(Path(log_dir))
    found = sink.read_events(level=level, event_type=event_type, session_id=session_id, limit=limit)
    if as_json:
        click.echo(json.dumps(found, indent=2))
        return
    if not found:
        click.echo("No events found.")
        return
    for e in found:
        code = f" [{e['error_code']}]" if e.get("error_code") else ""
        click.echo(f"{e['ts']}  {e['level']:7s} {e['event_type']}{code}  {e.get('message', '')}")


if __name__ == "__main__":
    main()
