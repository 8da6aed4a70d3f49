"""
BlockNotes — Block Renderer
=============================

Maps each block type to its widget class. The mapping covers every member
of BLOCK_TYPES; a block whose type has no widget is a BlockShapeError.
"""

from typing import Callable, Dict, Optional, Type

from blocknotes.editor.base import BlockWidget, ChangeCallback, KeyCallback
from blocknotes.editor.rich_blocks import HeadingBlockWidget, ImageBlockWidget, TableBlockWidget
from blocknotes.editor.text_block import TextBlockWidget
from blocknotes.editor.todo_block import TodoBlockWidget
from blocknotes.exceptions import BlockShapeError
from blocknotes.schemas.block import BLOCK_TYPES, Block

WIDGETS: Dict[str, Type[BlockWidget]] = {
    widget.block_type: widget
    for widget in (
        TextBlockWidget,
        HeadingBlockWidget,
        TodoBlockWidget,
        TableBlockWidget,
        ImageBlockWidget,
    )
}

if set(WIDGETS) != set(BLOCK_TYPES):
    raise RuntimeError(f"Widget registry out of sync with block types: {sorted(WIDGETS)}")


def render_block(
    block: Block,
    on_change: ChangeCallback,
    on_key: Optional[KeyCallback] = None,
    on_focus: Optional[Callable[[str], object]] = None,
) -> BlockWidget:
    try:
        widget_class = WIDGETS[block.type]
    except KeyError:
        raise BlockShapeError(
            message=f"No widget for block type '{block.type}'",
            context={"type": block.type},
        )
    return widget_class(block, on_change, on_key, on_focus)
