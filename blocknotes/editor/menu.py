"""
BlockNotes — Block Type Menu
==============================

What:  The slash-command overlay that turns a block into another type.
How:   Opened by BlockEditor with a screen position and the index of the
       block to replace. A live search string filters entries by label,
       case-insensitively. Selecting an entry hands (type, target index) to
       the owner's callback and closes the menu; a click outside the menu's
       bounds closes it with no other effect.

Layout constants mirror the rendered overlay (w-64, p-3 rows, search box),
so hit-testing matches what the user sees.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from blocknotes.editor.keys import Position, Rect

logger = logging.getLogger(__name__)

MENU_WIDTH = 256
SEARCH_HEIGHT = 57
ENTRY_HEIGHT = 48
MAX_LIST_HEIGHT = 256
EMPTY_STATE_HEIGHT = 56

EMPTY_MESSAGE = "No blocks match your search"


@dataclass(frozen=True)
class MenuEntry:
    type: str
    label: str
    icon: str


MENU_ENTRIES = (
    MenuEntry(type="text", label="Text", icon="📝"),
    MenuEntry(type="heading", label="Heading", icon="H"),
    MenuEntry(type="todo", label="To-do List", icon="✓"),
    MenuEntry(type="table", label="Table", icon="▦"),
    MenuEntry(type="image", label="Image", icon="🖼"),
)


class BlockMenu:
    """
    Menu state: closed, or open at a position for one target block.

    Args:
        on_select: called with (block_type, target_index) when an entry is
                   chosen while the menu is open
    """

    def __init__(self, on_select: Callable[[str, int], None]):
        self.on_select = on_select
        self.position: Optional[Position] = None
        self.target_index: Optional[int] = None
        self.query = ""

    @property
    def is_open(self) -> bool:
        return self.position is not None

    def open(self, position: Position, target_index: int) -> None:
        self.position = position
        self.target_index = target_index
        self.query = ""

    def close(self) -> None:
        self.position = None
        self.target_index = None
        self.query = ""

    def search(self, query: str) -> List[MenuEntry]:
        self.query = query
        return self.filtered

    @property
    def filtered(self) -> List[MenuEntry]:
        needle = self.query.lower()
        return [entry for entry in MENU_ENTRIES if needle in entry.label.lower()]

    @property
    def empty_message(self) -> Optional[str]:
        """Shown in place of the entry list when nothing matches."""
        return EMPTY_MESSAGE if self.is_open and not self.filtered else None

    def select(self, block_type: str) -> bool:
        """
        Choose a visible entry. Returns False (and leaves the menu as is) if
        the menu is closed or the type is filtered out.
        """
        if not self.is_open or self.target_index is None:
            return False
        if block_type not in {entry.type for entry in self.filtered}:
            logger.debug("Ignoring selection of hidden menu entry '%s'", block_type)
            return False

        target = self.target_index
        self.close()
        self.on_select(block_type, target)
        return True

    def bounds(self) -> Optional[Rect]:
        if self.position is None:
            return None
        count = len(self.filtered)
        list_height = min(count * ENTRY_HEIGHT, MAX_LIST_HEIGHT) if count else EMPTY_STATE_HEIGHT
        return Rect(
            top=self.position.top,
            left=self.position.left,
            width=MENU_WIDTH,
            height=SEARCH_HEIGHT + list_height,
        )

    def handle_click(self, x: float, y: float) -> bool:
        """Close on a click outside the overlay. Returns True if it closed."""
        rect = self.bounds()
        if rect is None or rect.contains(x, y):
            return False
        self.close()
        return True
