"""Generic list and text widget state used by the screens.

These hold only data and key handling; drawing is done by clup.tui.views.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from clup.core.events import Key

T = TypeVar("T")


@dataclass
class Picker(Generic[T]):
    """A filterable, cursor-driven list of items.

    Attributes:
        title: Heading shown above the items
        items: All items, in the order they were provided
        label: Function giving the display/filter text of an item
        cursor: Index into the *visible* items
        filtering: True while the filter prompt is being typed into
        filter_text: Current filter (case-insensitive substring)
    """

    title: str = ""
    items: list[T] = field(default_factory=list)
    label: Callable[[T], str] = str
    cursor: int = 0
    filtering: bool = False
    filter_text: str = ""

    def set_items(self, items: list[T]) -> None:
        self.items = list(items)
        self._clamp()

    def visible(self) -> list[T]:
        if not self.filter_text:
            return self.items
        needle = self.filter_text.lower()
        return [item for item in self.items if needle in self.label(item).lower()]

    def selected(self) -> T | None:
        visible = self.visible()
        if not visible:
            return None
        return visible[self.cursor]

    def window(self, height: int) -> tuple[int, list[T]]:
        """Return (offset, items) of the slice that keeps the cursor visible."""
        visible = self.visible()
        if height <= 0 or len(visible) <= height:
            return 0, visible
        offset = max(self.cursor - height + 1, 0)
        return offset, visible[offset : offset + height]

    def handle_key(self, key: Key) -> bool:
        """Apply a navigation or filter key. Returns True if the key was used."""
        if self.filtering:
            return self._handle_filter_key(key)

        text = key.text
        if text in ("up", "k"):
            self.cursor = max(self.cursor - 1, 0)
        elif text in ("down", "j"):
            self.cursor = min(self.cursor + 1, max(len(self.visible()) - 1, 0))
        elif text in ("home", "g"):
            self.cursor = 0
        elif text in ("end", "G"):
            self.cursor = max(len(self.visible()) - 1, 0)
        elif text == "/":
            self.filtering = True
        elif text == "escape" and self.filter_text:
            self.filter_text = ""
            self._clamp()
        else:
            return False
        return True

    def _handle_filter_key(self, key: Key) -> bool:
        if key.name == "enter":
            self.filtering = False
        elif key.name == "escape":
            self.filtering = False
            self.filter_text = ""
        elif key.name == "backspace":
            self.filter_text = self.filter_text[:-1]
        elif key.printable:
            self.filter_text += key.character
        else:
            return False
        self.cursor = 0
        return True

    def _clamp(self) -> None:
        self.cursor = min(self.cursor, max(len(self.visible()) - 1, 0))


@dataclass
class TextBuffer:
    """Editable text with a cursor.

    Single-line buffers ignore enter; multi-line buffers insert a newline.
    A limit of 0 means unlimited.
    """

    value: str = ""
    placeholder: str = ""
    multiline: bool = False
    limit: int = 0
    cursor: int = -1

    def __post_init__(self) -> None:
        if self.cursor < 0 or self.cursor > len(self.value):
            self.cursor = len(self.value)

    def reset(self) -> None:
        self.value = ""
        self.cursor = 0

    def insert(self, text: str) -> None:
        if self.limit:
            text = text[: max(self.limit - len(self.value), 0)]
        if not text:
            return
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def handle_key(self, key: Key) -> bool:
        """Apply an editing key. Returns True if the key was used."""
        name = key.name
        if name == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif name == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif name == "left":
            self.cursor = max(self.cursor - 1, 0)
        elif name == "right":
            self.cursor = min(self.cursor + 1, len(self.value))
        elif name == "home":
            self.cursor = self.value.rfind("\n", 0, self.cursor) + 1
        elif name == "end":
            end = self.value.find("\n", self.cursor)
            self.cursor = len(self.value) if end == -1 else end
        elif name == "enter":
            if not self.multiline:
                return False
            self.insert("\n")
        elif key.printable:
            self.insert(key.character)
        else:
            return False
        return True
