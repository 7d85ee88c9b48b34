"""Interactive action loop."""

from __future__ import annotations

import asyncio

from authpay.actions import ACTIONS, ActionSpec, get_action
from authpay.errors import UnknownActionError
from authpay.session import ClientSession
from authpay.types import Ok

from .render import Renderer

EXIT_COMMANDS = frozenset({"quit", "exit", "q"})


class InteractiveCli:
    """Read action keys from the prompt and launch each as a background call."""

    def __init__(self, session: ClientSession, renderer: Renderer) -> None:
        self._session = session
        self._renderer = renderer
        self._pending: set[asyncio.Task[None]] = set()

    async def run(self) -> None:
        self._renderer.welcome(self._session.settings.server_origin)
        self._renderer.actions(ACTIONS.values())
        self._renderer.info("[dim]Commands: <action>, log, clear, dismiss, actions, quit[/dim]")
        while True:
            try:
                raw = await self._renderer.prompt()
            except (KeyboardInterrupt, EOFError):
                break
            if not self.handle_line(raw):
                break
        await self.drain()
        self._renderer.info("Goodbye!")

    def handle_line(self, raw: str) -> bool:
        """Handle one input line; returns False when the loop should stop."""
        line = raw.strip().lower()
        if not line:
            return True
        if line in EXIT_COMMANDS:
            return False
        if line == "log":
            self.show_log()
        elif line == "clear":
            if self._session.store.can_clear:
                self._session.store.clear()
                self._renderer.info("[dim]Responses cleared[/dim]")
            else:
                self._renderer.info("[dim]Nothing to clear[/dim]")
        elif line == "dismiss":
            self._session.dispatcher.dismiss_error()
        elif line == "actions":
            self._renderer.actions(ACTIONS.values())
        else:
            try:
                action = get_action(line)
            except UnknownActionError as exc:
                self._renderer.error(str(exc))
                return True
            self.launch(action)
        return True

    def show_log(self) -> None:
        """Render the result log followed by the session's loading and error state."""
        dispatcher = self._session.dispatcher
        self._renderer.entries(self._session.store)
        if dispatcher.loading_key is not None:
            self._renderer.loading(dispatcher.loading_key)
        if dispatcher.error is not None:
            self._renderer.error(dispatcher.error)

    def launch(self, action: ActionSpec) -> asyncio.Task[None]:
        self._renderer.loading(action.key)
        task = asyncio.create_task(self._run_action(action))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        # In-flight calls always run to completion.
        if self._pending:
            await asyncio.gather(*self._pending)

    async def _run_action(self, action: ActionSpec) -> None:
        result = await self._session.dispatcher.run_action(action)
        if isinstance(result, Ok):
            self._renderer.outcome(action.title, action.accent, result.outcome)
        else:
            self._renderer.error(result.message)
