"""Main Textual app for the clup TUI."""

import logging
from typing import Callable

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Header

from clup.core.api import ClickUpClient
from clup.core.effects import Effect, execute
from clup.core.events import Event, Key, Resize
from clup.core.machine import Transition, apply
from clup.core.screens import Quitting, TaskList, WizardPriority
from clup.core.session import Session
from clup.tui.views import render
from clup.tui.widgets.screen_view import ScreenView

logger = logging.getLogger(__name__)

SPINNER_INTERVAL = 0.1


class EffectDone(Message):
    """Posted by a worker when its effect has resolved."""

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


class ClupApp(App):
    """clup TUI application.

    Every input (keys, resizes and effect results) goes through ``feed``
    one at a time. Effects run on independent workers and report back by
    posting an EffectDone message, so the session is only ever touched
    from the app's own message loop.
    """

    TITLE = "clup"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Quit", show=False, priority=True),
        Binding("ctrl+q", "interrupt", "Quit", show=False, priority=True),
    ]
    CSS = """
    ScreenView {
        height: 1fr;
        padding: 1 2;
    }
    """

    def __init__(
        self,
        start: Transition,
        client_factory: Callable[[str], ClickUpClient] = ClickUpClient,
    ) -> None:
        super().__init__()
        self.session: Session = start.session
        self._initial_effects: list[Effect] = list(start.effects)
        self._client_factory = client_factory
        self._http_clients: dict[str, ClickUpClient] = {}
        self._spinner_frame = 0

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        yield ScreenView()

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.query_one(ScreenView).focus()
        self.set_interval(SPINNER_INTERVAL, self._tick_spinner)
        self.session.width = self.size.width
        self.session.height = self.size.height
        self._show_screen()
        self._start_effects(self._initial_effects)
        self._initial_effects = []

    async def on_unmount(self) -> None:
        """Close any HTTP clients opened during the session."""
        for client in self._http_clients.values():
            await client.aclose()
        self._http_clients.clear()

    def feed(self, event: Event) -> None:
        """Apply one event and start the effects it produced."""
        transition = apply(self.session, event)
        self.session = transition.session
        self._show_screen()
        if isinstance(self.session.screen, Quitting):
            logger.info("Exiting")
            self.exit()
            return
        self._start_effects(transition.effects)

    def action_interrupt(self) -> None:
        """Ctrl+C or Ctrl+Q: routed through the state machine like any other key."""
        self.feed(Key("ctrl+c"))

    def on_resize(self, event: events.Resize) -> None:
        self.feed(Resize(event.size.width, event.size.height))

    def on_effect_done(self, message: EffectDone) -> None:
        self.feed(message.event)

    def _session_client(self) -> ClickUpClient:
        """HTTP client for the current token (the token can change after login)."""
        token = self.session.credentials.api_token
        if token not in self._http_clients:
            self._http_clients[token] = self._client_factory(token)
        return self._http_clients[token]

    def _start_effects(self, effects: list[Effect]) -> None:
        if not effects:
            return
        client = self._session_client()
        for effect in effects:
            logger.debug("Starting %r", effect)
            self.run_worker(self._perform(effect, client), group="effects")

    async def _perform(self, effect: Effect, client: ClickUpClient) -> None:
        event = await execute(effect, client)
        self.post_message(EffectDone(event))

    def _spinner_active(self) -> bool:
        screen = self.session.screen
        if isinstance(screen, TaskList):
            return screen.loading
        if isinstance(screen, WizardPriority):
            return screen.submitted
        return False

    def _tick_spinner(self) -> None:
        if self._spinner_active():
            self._spinner_frame += 1
            self._show_screen()

    def _show_screen(self) -> None:
        self.sub_title = self.session.selected_space_name
        for view in self.query(ScreenView):
            view.update(render(self.session, self._spinner_frame))
