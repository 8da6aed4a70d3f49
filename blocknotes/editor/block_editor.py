"""
BlockNotes — Block Editor
===========================

What:  In-memory state of one note's body: the ordered block list, the
       active block, and the slash-command menu.
Why:   Keeps every structural rule of the editor (ids unique, never empty,
       active id always valid) in one object that any UI can drive.
How:   Mutations build a new list, swap it in, and call `on_change` with a
       copy of the full sequence. Widgets report edits via update_block and
       unhandled keys via handle_key.
Who:   Created by NotePageController after a note is loaded.

Invariants:
    - the sequence is never empty
    - block ids are unique
    - active_block_id is None or the id of a block in the sequence
"""

import logging
from typing import Any, Callable, List, Optional, Union

from blocknotes.editor.base import BlockWidget
from blocknotes.editor.keys import KeyEvent, Position, Rect
from blocknotes.editor.menu import BlockMenu
from blocknotes.editor.renderer import render_block
from blocknotes.schemas.block import (
    Block,
    TextBlock,
    create_block,
    normalize_content,
    parse_block,
    visible_text,
)

logger = logging.getLogger(__name__)

# Vertical gap between a block's top edge and the menu it opens
MENU_OFFSET = 20

ChangeListener = Callable[[List[Block]], None]


class BlockEditor:
    """
    Args:
        blocks:    initial content in any persisted form (normalized here)
        on_change: called with the full block list after every mutation
    """

    def __init__(
        self,
        blocks: Union[List[Any], str, None] = None,
        on_change: Optional[ChangeListener] = None,
    ):
        self._blocks: List[Block] = normalize_content(blocks)
        self.on_change = on_change
        self.active_block_id: Optional[str] = self._blocks[0].id
        self.menu = BlockMenu(on_select=self._on_menu_select)

    # ── Queries ───────────────────────────────────────────────────────────

    @property
    def blocks(self) -> List[Block]:
        return list(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def index_of(self, block_id: str) -> Optional[int]:
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return None

    def widget(self, block_id: str) -> BlockWidget:
        """A widget for the block, wired back to this editor."""
        index = self.index_of(block_id)
        if index is None:
            raise KeyError(block_id)
        return render_block(
            self._blocks[index],
            on_change=self.update_block,
            on_key=self.handle_key,
            on_focus=self.focus,
        )

    def widgets(self) -> List[BlockWidget]:
        return [self.widget(block.id) for block in self._blocks]

    # ── Mutations ─────────────────────────────────────────────────────────

    def _commit(self, blocks: List[Block]) -> None:
        self._blocks = blocks
        if self.on_change is not None:
            self.on_change(list(blocks))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._blocks):
            raise IndexError(f"Block index {index} out of range (0..{len(self._blocks) - 1})")

    def insert_block(self, block_type: str, index: int) -> Block:
        """
        Insert an empty block of `block_type` right after position `index`
        (-1 inserts at the top) and make it active.

        Raises:
            BlockShapeError: unknown block type
            IndexError: index outside -1..len-1
        """
        if not -1 <= index < len(self._blocks):
            raise IndexError(f"Block index {index} out of range (-1..{len(self._blocks) - 1})")
        block = create_block(block_type)
        blocks = list(self._blocks)
        blocks.insert(index + 1, block)
        self.active_block_id = block.id
        self._commit(blocks)
        return block

    def append_block(self, block_type: str) -> Block:
        return self.insert_block(block_type, len(self._blocks) - 1)

    def replace_block(self, index: int, block_type: str) -> Block:
        """Swap the block at `index` for a fresh one; old content is discarded."""
        self._check_index(index)
        block = create_block(block_type)
        blocks = list(self._blocks)
        blocks[index] = block
        self.active_block_id = block.id
        self._commit(blocks)
        return block

    def delete_block(self, index: int) -> bool:
        """
        Remove the block at `index`. The last remaining block cannot be
        deleted (returns False). Afterwards the block now at `index`, or the
        new last block, is active.
        """
        self._check_index(index)
        if len(self._blocks) == 1:
            return False
        blocks = list(self._blocks)
        del blocks[index]
        self.active_block_id = blocks[min(index, len(blocks) - 1)].id
        self._commit(blocks)
        return True

    def update_block(self, block: Any) -> bool:
        """Replace the block with the same id in place. Unknown ids are ignored."""
        block = parse_block(block)
        index = self.index_of(block.id)
        if index is None:
            logger.debug("Ignoring update for unknown block %s", block.id)
            return False
        blocks = list(self._blocks)
        blocks[index] = block
        self._commit(blocks)
        return True

    def focus(self, block_id: Optional[str]) -> bool:
        if block_id is not None and self.index_of(block_id) is None:
            return False
        self.active_block_id = block_id
        return True

    # ── Keyboard ──────────────────────────────────────────────────────────

    def handle_key(self, event: KeyEvent, block_id: str) -> bool:
        """
        Structural key commands. Returns True when the key was consumed and
        the host must suppress its default action.
        """
        index = self.index_of(block_id)
        if index is None:
            return False
        block = self._blocks[index]

        if event.key == "Enter" and event.shift:
            self.insert_block("text", index)
            return True

        if event.key == "Backspace":
            if isinstance(block, TextBlock) and block.content == "" and len(self._blocks) > 1:
                self.delete_block(index)
                if index > 0:
                    self.active_block_id = self._blocks[index - 1].id
                return True
            return False

        if event.key == "/" and visible_text(block) == "":
            anchor = event.anchor or Rect()
            self.menu.open(Position(top=anchor.top + MENU_OFFSET, left=anchor.left), index)
            return True

        return False

    def _on_menu_select(self, block_type: str, target_index: int) -> None:
        if 0 <= target_index < len(self._blocks):
            self.replace_block(target_index, block_type)
        else:
            logger.warning("Menu target %d no longer exists", target_index)
