"""CLI entry point: play the light-cycle protocol over stdin/stdout."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from cyclegrid.config import EngineConfig, dump_config, load_config
from cyclegrid.protocol import read_turn
from cyclegrid.session import GameSession
from cyclegrid.utils.errors import ConfigError, ProtocolError
from cyclegrid.utils.real_time_logger import get_logger, set_level

LOGGER = get_logger()

app = typer.Typer(add_completion=False)


def _resolve_config(config: Optional[Path], timeout_ms: Optional[int]) -> EngineConfig:
    try:
        resolved = load_config(config)
    except FileNotFoundError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc
    if timeout_ms is not None:
        resolved = resolved.model_copy(update={"timeout_ms": timeout_ms})
    return resolved


@app.command()
def play(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to cyclegrid.yaml."),
    timeout_ms: Optional[int] = typer.Option(
        None, "--timeout-ms", min=1, help="Override the per-decision time budget."
    ),
    dump_board: bool = typer.Option(
        False, "--dump-board", help="Log the board and every cycle position each turn (debug level)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
) -> None:
    """Read turns from stdin and print one direction per turn."""

    if verbose or dump_board:
        set_level("DEBUG")
    resolved = _resolve_config(config, timeout_ms)

    turns = 0
    with GameSession(resolved) as session:
        while True:
            try:
                turn = read_turn(sys.stdin)
            except ProtocolError as exc:
                LOGGER.error("[play] %s", exc)
                raise typer.Exit(code=3) from exc
            if turn is None:
                break
            session.ingest(turn)
            if dump_board:
                LOGGER.debug("[play] turn %d board:\n%s", turns, session.grid.render_ascii())
                for cycle in session.grid.agents():
                    LOGGER.debug("[play] %s", cycle.describe())
            typer.echo(session.decide(turn.my_id))
            sys.stdout.flush()
            turns += 1
    LOGGER.info("[play] input closed after %d turns", turns)


@app.command("show-config")
def show_config(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to cyclegrid.yaml."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the resolved YAML here."),
) -> None:
    """Print the resolved configuration as YAML."""

    text = dump_config(_resolve_config(config, None))
    if out is None:
        typer.echo(text, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    typer.secho(f"Wrote {out}", fg=typer.colors.GREEN, err=True)


if __name__ == "__main__":
    app()
