"""
BlockNotes — Text Block Widget
================================

What:  Multi-line plain text block with soft-tab indentation.
How:   The indentation rules are plain functions over (content, selection)
       returning a TextEdit, so they can be tested without a widget.
       TextBlockWidget tracks the selection and applies them on key presses.

Key handling (INDENT_WIDTH = 2):
    Tab          replace the selection with one indent
    Shift+Tab    remove one indent from the start of the current line
    Backspace    in leading whitespace on an indent boundary: delete one indent
                 on an empty block: editor deletes the block
    Shift+Enter  editor inserts a text block below
    /            on an empty block: editor opens the type menu
"""

from typing import Callable, Optional, Tuple

from blocknotes.editor.base import BlockWidget, ChangeCallback, KeyCallback
from blocknotes.editor.keys import KeyEvent, TextEdit
from blocknotes.schemas.block import TextBlock

INDENT_WIDTH = 2
INDENT = " " * INDENT_WIDTH


def line_start(content: str, pos: int) -> int:
    """Offset of the first character of the line containing `pos`."""
    return content.rfind("\n", 0, pos) + 1


def insert_indent(content: str, start: int, end: int) -> TextEdit:
    return TextEdit(content=content[:start] + INDENT + content[end:], cursor=start + INDENT_WIDTH)


def remove_indent(content: str, start: int) -> Optional[TextEdit]:
    """
    Shift+Tab. Returns None when the line has less than one full indent
    before the caret, or when the caret sits inside the indent off a tab stop.
    """
    ls = line_start(content, start)
    before = content[ls:start]
    leading = len(before) - len(before.lstrip(" "))
    if leading < INDENT_WIDTH:
        return None
    if leading == len(before) and len(before) % INDENT_WIDTH:
        return None

    new_content = content[:ls] + content[ls + INDENT_WIDTH:]
    return TextEdit(content=new_content, cursor=max(ls, start - INDENT_WIDTH))


def delete_indent(content: str, start: int, end: int) -> Optional[TextEdit]:
    """
    Backspace over indentation. Only applies to a collapsed selection whose
    line text before the caret is all spaces, a non-zero multiple of the indent.
    """
    if start != end:
        return None
    before = content[line_start(content, start):start]
    if not before or before.strip(" ") or len(before) % INDENT_WIDTH:
        return None
    return TextEdit(content=content[:start - INDENT_WIDTH] + content[start:], cursor=start - INDENT_WIDTH)


class TextBlockWidget(BlockWidget):

    block_type = "text"

    def __init__(
        self,
        block: TextBlock,
        on_change: ChangeCallback,
        on_key: Optional[KeyCallback] = None,
        on_focus: Optional[Callable[[str], object]] = None,
    ):
        super().__init__(block, on_change, on_key, on_focus)
        end = len(self.content)
        self._selection: Tuple[int, int] = (end, end)

    @property
    def content(self) -> str:
        return self._block.content if isinstance(self._block.content, str) else ""

    @property
    def selection(self) -> Tuple[int, int]:
        return self._selection

    def select(self, start: int, end: Optional[int] = None) -> None:
        size = len(self.content)
        start = max(0, min(start, size))
        end = start if end is None else max(start, min(end, size))
        self._selection = (start, end)

    def set_content(self, content: str, cursor: Optional[int] = None) -> None:
        """Typing: replace the whole string, caret at `cursor` (default: end)."""
        self._emit(content=content)
        self.select(len(content) if cursor is None else cursor)

    def _apply(self, edit: TextEdit) -> bool:
        self.set_content(edit.content, edit.cursor)
        return True

    def handle_key(self, event: KeyEvent) -> bool:
        start, end = self._selection
        content = self.content

        if event.key == "Tab":
            if not event.shift:
                return self._apply(insert_indent(content, start, end))
            edit = remove_indent(content, start)
            if edit is not None:
                self._apply(edit)
            # Shift+Tab never moves focus, even when nothing was removed
            return True

        if event.key == "Backspace":
            edit = delete_indent(content, start, end)
            if edit is not None:
                return self._apply(edit)
            if content == "":
                return self.forward(event)
            return False

        if (event.key == "Enter" and event.shift) or (event.key == "/" and content == ""):
            return self.forward(event)

        return False
