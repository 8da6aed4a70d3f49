"""
BlockNotes — Block Widget Interface
=====================================

What:  Abstract base for the per-type block widgets.
How:   A widget wraps one block. Edits build a new block and report it
       through `on_change`; keys the widget does not consume itself are
       passed to `on_key` (the editor's handle_key) with the block's id.

Contract:
    - on_change always receives a complete block of the widget's type
    - handle_key returns True when the default action must be suppressed
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from blocknotes.editor.keys import KeyEvent
from blocknotes.schemas.block import Block

ChangeCallback = Callable[[Block], None]
KeyCallback = Callable[[KeyEvent, str], bool]


def _ignore_key(event: KeyEvent, block_id: str) -> bool:
    return False


class BlockWidget(ABC):

    block_type: str = ""

    def __init__(
        self,
        block: Block,
        on_change: ChangeCallback,
        on_key: Optional[KeyCallback] = None,
        on_focus: Optional[Callable[[str], object]] = None,
    ):
        if block.type != self.block_type:
            raise TypeError(f"{type(self).__name__} cannot render a '{block.type}' block")
        self._block = block
        self.on_change = on_change
        self.on_key = on_key or _ignore_key
        self.on_focus = on_focus

    @property
    def block(self) -> Block:
        return self._block

    @property
    def block_id(self) -> str:
        return self._block.id

    def focus(self) -> None:
        if self.on_focus is not None:
            self.on_focus(self._block.id)

    def _emit(self, **changes) -> Block:
        self._block = self._block.model_copy(update=changes)
        self.on_change(self._block)
        return self._block

    def forward(self, event: KeyEvent) -> bool:
        return self.on_key(event, self._block.id)

    @abstractmethod
    def handle_key(self, event: KeyEvent) -> bool:
        """Process a key press; True means the default action is suppressed."""
        ...
