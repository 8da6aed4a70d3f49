"""
BlockNotes — Todo Block Widget
================================

Checkbox plus a single-line text input. Every key goes to the editor.
"""

from blocknotes.editor.base import BlockWidget
from blocknotes.editor.keys import KeyEvent
from blocknotes.schemas.block import TodoContent


class TodoBlockWidget(BlockWidget):

    block_type = "todo"

    @property
    def content(self) -> TodoContent:
        # model_construct() bypasses validation; treat anything odd as empty
        content = self._block.content
        return content if isinstance(content, TodoContent) else TodoContent()

    @property
    def text(self) -> str:
        return self.content.text

    @property
    def checked(self) -> bool:
        return self.content.checked

    def toggle(self) -> None:
        current = self.content
        self._emit(content=TodoContent(text=current.text, checked=not current.checked))

    def set_text(self, text: str) -> None:
        current = self.content
        self._emit(content=TodoContent(text=text, checked=current.checked))

    def handle_key(self, event: KeyEvent) -> bool:
        return self.forward(event)
