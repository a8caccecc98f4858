"""Focusable widget that shows the active screen and captures keys."""

from textual import events
from textual.widgets import Static

from clup.core.events import Key


class ScreenView(Static, can_focus=True):
    """Displays rendered screen text and forwards every key to the app.

    Keys are stopped here so textual's own bindings (tab focus cycling and
    the like) never see them; the state machine decides what each key means.
    """

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("markup", False)
        super().__init__(*args, **kwargs)

    def on_key(self, event: events.Key) -> None:
        """Hand the key to the app's event funnel."""
        event.stop()
        event.prevent_default()
        self.app.feed(Key(event.key, event.character))
