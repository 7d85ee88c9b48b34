"""Terminal renderer for authpay."""

from __future__ import annotations

import json
from collections.abc import Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markup import escape

from authpay.actions import PRICE_SATS, ActionSpec
from authpay.types import Accent, RequestOutcome, ResultEntry

ACCENT_STYLES = {
    "emerald": "green",
    "amber": "yellow",
    "violet": "magenta",
    "cyan": "cyan",
    "sky": "blue",
}


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._prompt_session: PromptSession[str] | None = None

    def welcome(self, origin: str) -> None:
        self.console.print("[bold]BSV Auth + Payment[/bold]")
        self.console.print("[dim]BRC-31 mutual authentication · BRC-29 micropayments[/dim]")
        self.console.print(f"[bold]Server:[/bold] [cyan]{escape(origin)}[/cyan]")

    def actions(self, actions: Iterable[ActionSpec]) -> None:
        for action in actions:
            style = ACCENT_STYLES[action.accent]
            price = f" [dim]{PRICE_SATS} sats[/dim]" if action.paid else ""
            self.console.print(
                f"[bold {style}]{action.key:<12}[/bold {style}] {escape(action.title)}"
                f" [dim]({escape(action.label)})[/dim] {escape(action.detail)}{price}"
            )

    def info(self, message: str) -> None:
        self.console.print(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def loading(self, key: str) -> None:
        self.console.print(f"[dim]… {escape(key)}[/dim]")

    def entry(self, entry: ResultEntry) -> None:
        self.outcome(entry.title, entry.accent, entry.outcome)

    def outcome(self, title: str, accent: Accent, outcome: RequestOutcome) -> None:
        """Render one result block: header line, optional txid, JSON body."""
        style = ACCENT_STYLES[accent]
        status_style = "green" if outcome.ok else "red"
        badge = f" [{style}]\\[{outcome.transport}][/{style}]" if outcome.transport else ""
        self.console.print(
            f"[bold {style}]{escape(title)}[/bold {style}]{badge}"
            f" [{status_style}]{outcome.status}[/{status_style}] [dim]{outcome.duration_ms}ms[/dim]"
        )
        if outcome.txid:
            self.console.print(f"  [dim]txid[/dim] {outcome.txid}")
        body = json.dumps(outcome.data, indent=2, ensure_ascii=False, default=str)
        self.console.print(escape(body), highlight=False)

    def entries(self, entries: Iterable[ResultEntry]) -> None:
        for entry in entries:
            self.entry(entry)

    async def prompt(self, message: str = "> ") -> str:
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        with patch_stdout(raw=True):
            return await self._prompt_session.prompt_async(message)
