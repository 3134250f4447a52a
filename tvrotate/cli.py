"""Command line interface for rotating token validation credentials."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer

from .config import RotatorConfig, load_config
from .dispatch import RequestDispatcher
from .errors import RotatorError
from .scheduler import run_periodic

app = typer.Typer(help="CLI for rotating token validation credentials")

_state: dict = {"config_path": None}


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to the YAML configuration file"
    ),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """tvrotate CLI entry point."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _state["config_path"] = config


def _config() -> RotatorConfig:
    return load_config(_state["config_path"])


async def _with_dispatcher(config: RotatorConfig, method: str) -> str:
    dispatcher = RequestDispatcher(config)
    try:
        return await dispatcher.handle_request(method)
    finally:
        await dispatcher.aclose()


@app.command("fetch")
def fetch() -> None:
    """Print the credential envelope served by the source URL."""
    try:
        body = asyncio.run(_with_dispatcher(_config(), "GET"))
    except RotatorError as e:
        typer.secho(f"Fetch failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(body)


@app.command("update")
def update() -> None:
    """
    Push the source key set to the token configuration.

    Prints the management API response body. The response is printed even
    when the management API rejected the update, so inspect it for
    ``"success": false``.

    Example:
        CF_API_TOKEN=... tvrotate --config config.yaml update
    """
    try:
        body = asyncio.run(_with_dispatcher(_config(), "POST"))
    except RotatorError as e:
        typer.secho(f"Update failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(body)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(8787, help="Port to listen on"),
) -> None:
    """Serve the GET/POST credential endpoints over HTTP."""
    import uvicorn

    from .server import create_app

    uvicorn.run(create_app(_config()), host=host, port=port)


@app.command("schedule")
def schedule(
    interval: Optional[float] = typer.Option(
        None, help="Seconds between updates (default: schedule_interval from config)"
    ),
    lifespan: Optional[float] = typer.Option(
        None, help="Stop after this many seconds (default: run indefinitely)"
    ),
) -> None:
    """Run scheduled credential updates until stopped or lifespan expires."""
    config = _config()

    async def _run() -> int:
        dispatcher = RequestDispatcher(config)
        try:
            return await run_periodic(
                dispatcher, interval or config.schedule_interval, lifespan=lifespan
            )
        finally:
            await dispatcher.aclose()

    runs = asyncio.run(_run())
    typer.echo(f"Completed {runs} scheduled runs")
