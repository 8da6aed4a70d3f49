"""
BlockNotes — Heading, Table and Image Widgets
===============================================

What:  Widgets for the structured block types.
How:   Same change-callback contract as the text and todo widgets: each
       setter builds a fresh content model and emits the whole block.

Key handling:
    heading      all keys go to the editor (single-line input, like todo)
    table/image  only Shift+Enter goes to the editor; typing "/" into a cell
                 or caption field must not open the type menu
"""

from typing import List, Optional

from blocknotes.editor.base import BlockWidget
from blocknotes.editor.keys import KeyEvent
from blocknotes.exceptions import ValidationError
from blocknotes.schemas.block import HeadingContent, ImageContent, TableContent

HEADING_LEVELS = (1, 2, 3)


class HeadingBlockWidget(BlockWidget):

    block_type = "heading"

    @property
    def content(self) -> HeadingContent:
        content = self._block.content
        return content if isinstance(content, HeadingContent) else HeadingContent()

    def set_text(self, text: str) -> None:
        self._emit(content=HeadingContent(text=text, level=self.content.level))

    def set_level(self, level: int) -> None:
        if level not in HEADING_LEVELS:
            raise ValidationError(
                message=f"Heading level must be one of {HEADING_LEVELS}",
                field="level",
                context={"received": level},
            )
        self._emit(content=HeadingContent(text=self.content.text, level=level))

    def handle_key(self, event: KeyEvent) -> bool:
        return self.forward(event)


class TableBlockWidget(BlockWidget):
    """Rectangular grid of string cells."""

    block_type = "table"

    @property
    def rows(self) -> List[List[str]]:
        content = self._block.content
        rows = content.rows if isinstance(content, TableContent) else TableContent().rows
        return [list(row) for row in rows]

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def set_cell(self, row: int, column: int, value: str) -> None:
        rows = self.rows
        if not (0 <= row < len(rows)) or not (0 <= column < len(rows[row])):
            raise IndexError(f"Cell ({row}, {column}) is outside the table")
        rows[row][column] = value
        self._emit(content=TableContent(rows=rows))

    def add_row(self) -> None:
        rows = self.rows
        rows.append([""] * self.column_count)
        self._emit(content=TableContent(rows=rows))

    def add_column(self) -> None:
        rows = [row + [""] for row in self.rows]
        self._emit(content=TableContent(rows=rows))

    def handle_key(self, event: KeyEvent) -> bool:
        if event.key == "Enter" and event.shift:
            return self.forward(event)
        return False


class ImageBlockWidget(BlockWidget):

    block_type = "image"

    @property
    def content(self) -> ImageContent:
        content = self._block.content
        return content if isinstance(content, ImageContent) else ImageContent()

    def _update(self, **fields) -> None:
        self._emit(content=self.content.model_copy(update=fields))

    def set_src(self, src: str) -> None:
        self._update(src=src)

    def set_alt(self, alt: str) -> None:
        self._update(alt=alt)

    def set_caption(self, caption: Optional[str]) -> None:
        # An emptied caption field removes the caption
        self._update(caption=caption or None)

    def handle_key(self, event: KeyEvent) -> bool:
        if event.key == "Enter" and event.shift:
            return self.forward(event)
        return False
