"""
BlockNotes — Editor Input Values
==================================

Plain values passed from whatever UI hosts the editor: key presses, screen
rectangles and text edits. Nothing here knows about a toolkit.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    """Top-left corner of an overlay, in page pixels."""
    top: float
    left: float


@dataclass(frozen=True)
class Rect:
    """On-screen rectangle of a block, in page pixels."""
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.left + self.width and self.top <= y <= self.top + self.height


@dataclass(frozen=True)
class KeyEvent:
    """
    A key press delivered to a block.

    `key` uses DOM key names ("Enter", "Backspace", "Tab", "/").
    `anchor` is the rectangle of the block that received the key; the type
    menu opens below it.
    """
    key: str
    shift: bool = False
    anchor: Optional[Rect] = None


@dataclass(frozen=True)
class TextEdit:
    """Result of a text operation: the complete new string and caret offset."""
    content: str
    cursor: int
