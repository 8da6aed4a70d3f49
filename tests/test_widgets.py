"""
BlockNotes — Todo, Heading, Table and Image Widget Tests
==========================================================
"""

import pytest

from blocknotes.editor.keys import KeyEvent
from blocknotes.editor.renderer import WIDGETS, render_block
from blocknotes.editor.rich_blocks import HeadingBlockWidget, ImageBlockWidget, TableBlockWidget
from blocknotes.editor.todo_block import TodoBlockWidget
from blocknotes.exceptions import ValidationError
from blocknotes.schemas.block import (
    BLOCK_TYPES,
    HeadingBlock,
    ImageBlock,
    TableBlock,
    TodoBlock,
    create_block,
    parse_block,
)


class TestTodoBlockWidget:

    def setup_method(self):
        self.changes = []
        self.forwarded = []

    def make(self, block):
        def on_key(event, block_id):
            self.forwarded.append((event.key, block_id))
            return event.key == "Enter"

        return TodoBlockWidget(block, on_change=self.changes.append, on_key=on_key)

    def test_malformed_content_reads_as_default(self):
        widget = self.make(parse_block({"id": "t", "type": "todo", "content": "garbage"}))

        assert widget.text == ""
        assert widget.checked is False

    def test_unvalidated_content_reads_as_default(self):
        block = TodoBlock.model_construct(id="t", type="todo", content=None)
        widget = self.make(block)

        assert widget.text == ""
        assert widget.checked is False

    def test_toggle_preserves_text(self):
        widget = self.make(TodoBlock(id="t", content={"text": "milk", "checked": False}))

        widget.toggle()

        assert self.changes[-1].content.model_dump() == {"text": "milk", "checked": True}
        widget.toggle()
        assert self.changes[-1].content.checked is False

    def test_set_text_preserves_checked(self):
        widget = self.make(TodoBlock(id="t", content={"text": "", "checked": True}))

        widget.set_text("eggs")

        block = self.changes[-1]
        assert block.id == "t"
        assert block.content.text == "eggs"
        assert block.content.checked is True

    def test_every_key_goes_to_editor(self):
        widget = self.make(TodoBlock(id="t"))

        assert widget.handle_key(KeyEvent("Enter", shift=True)) is True
        assert widget.handle_key(KeyEvent("Backspace")) is False
        assert widget.handle_key(KeyEvent("/")) is False

        assert self.forwarded == [("Enter", "t"), ("Backspace", "t"), ("/", "t")]


class TestHeadingBlockWidget:

    def test_set_text_and_level(self):
        changes = []
        widget = HeadingBlockWidget(HeadingBlock(id="h"), on_change=changes.append)

        widget.set_text("Title")
        widget.set_level(3)

        assert changes[-1].content.model_dump() == {"text": "Title", "level": 3}

    def test_invalid_level(self):
        widget = HeadingBlockWidget(HeadingBlock(id="h"), on_change=lambda b: None)

        with pytest.raises(ValidationError):
            widget.set_level(4)


class TestTableBlockWidget:

    def setup_method(self):
        self.changes = []
        self.widget = TableBlockWidget(TableBlock(id="tb"), on_change=self.changes.append)

    def test_default_grid(self):
        assert self.widget.rows == [["", ""], ["", ""]]

    def test_set_cell(self):
        self.widget.set_cell(1, 0, "x")
        assert self.changes[-1].content.rows == [["", ""], ["x", ""]]

    def test_set_cell_out_of_range(self):
        with pytest.raises(IndexError):
            self.widget.set_cell(2, 0, "x")

    def test_add_row_and_column(self):
        self.widget.add_row()
        self.widget.add_column()

        rows = self.changes[-1].content.rows
        assert len(rows) == 3
        assert all(len(row) == 3 for row in rows)

    def test_slash_in_cell_is_not_a_command(self):
        forwarded = []
        widget = TableBlockWidget(
            TableBlock(id="tb"),
            on_change=lambda b: None,
            on_key=lambda e, i: forwarded.append(e.key) or True,
        )

        assert widget.handle_key(KeyEvent("/")) is False
        assert widget.handle_key(KeyEvent("Enter", shift=True)) is True
        assert forwarded == ["Enter"]


class TestImageBlockWidget:

    def test_fields(self):
        changes = []
        widget = ImageBlockWidget(ImageBlock(id="i"), on_change=changes.append)

        widget.set_src("https://example.com/cat.png")
        widget.set_alt("a cat")
        widget.set_caption("")

        assert changes[-1].content.model_dump() == {
            "src": "https://example.com/cat.png",
            "alt": "a cat",
            "caption": None,
        }

        widget.set_caption("Figure 1")
        assert changes[-1].content.caption == "Figure 1"


class TestRenderer:

    def test_registry_covers_all_types(self):
        assert set(WIDGETS) == set(BLOCK_TYPES)

    @pytest.mark.parametrize("block_type", BLOCK_TYPES)
    def test_render_picks_matching_widget(self, block_type):
        widget = render_block(create_block(block_type), on_change=lambda b: None)

        assert isinstance(widget, WIDGETS[block_type])
        assert widget.block.type == block_type
