"""CLI main module for authpay."""

from __future__ import annotations

import asyncio

import typer

from authpay.actions import ACTIONS, ActionSpec, get_action
from authpay.config import Settings, load_settings
from authpay.errors import ConfigurationError, UnknownActionError
from authpay.logging_utils import configure_logging
from authpay.session import build_session
from authpay.types import Err

from .interactive import InteractiveCli
from .render import Renderer

app = typer.Typer(
    name="authpay",
    help="Exercise a BRC-31/BRC-29 authenticated, paid HTTP server.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _exit_with_error(renderer: Renderer, message: str) -> typer.Exit:
    renderer.error(message)
    return typer.Exit(1)


def _load_settings(renderer: Renderer, dev: bool | None, server_url: str | None) -> Settings:
    try:
        settings = load_settings(dev=dev, server_url=server_url)
    except ConfigurationError as exc:
        raise _exit_with_error(renderer, f"Invalid configuration: {exc!s}") from exc
    configure_logging(settings.log_level)
    return settings


@app.command("actions")
def list_actions() -> None:
    """List the actions that can be called."""

    Renderer().actions(ACTIONS.values())


@app.command()
def call(
    keys: list[str] = typer.Argument(..., help="Action keys, e.g. free balance paid-auto"),  # noqa: B008
    dev: bool | None = typer.Option(None, "--dev/--prod", help="Target the local development server"),
    server_url: str | None = typer.Option(None, "--server-url", help="Override the deployed server origin"),
    concurrent: bool = typer.Option(False, "--concurrent", help="Start all calls at once"),
) -> None:
    """Call one or more actions and print the response log."""

    renderer = Renderer()
    settings = _load_settings(renderer, dev, server_url)
    try:
        actions = [get_action(key) for key in keys]
    except UnknownActionError as exc:
        raise _exit_with_error(renderer, str(exc)) from exc

    failed = asyncio.run(_run_calls(settings, actions, renderer, concurrent=concurrent))
    if failed:
        raise typer.Exit(1)


async def _run_calls(settings: Settings, actions: list[ActionSpec], renderer: Renderer, *, concurrent: bool) -> bool:
    async with build_session(settings) as session:
        results = await session.run(actions, concurrent=concurrent)
        renderer.entries(session.store)
        failures = [result.message for result in results if isinstance(result, Err)]
        for message in failures:
            renderer.error(message)
        return bool(failures)


@app.command()
def chat(
    dev: bool | None = typer.Option(None, "--dev/--prod", help="Target the local development server"),
    server_url: str | None = typer.Option(None, "--server-url", help="Override the deployed server origin"),
) -> None:
    """Start an interactive session."""

    renderer = Renderer()
    settings = _load_settings(renderer, dev, server_url)
    asyncio.run(_run_interactive(settings, renderer))


async def _run_interactive(settings: Settings, renderer: Renderer) -> None:
    async with build_session(settings) as session:
        await InteractiveCli(session, renderer).run()


if __name__ == "__main__":
    app()
