"""
BlockNotes — Block Schemas
============================

What:  Pydantic models for the five block types and the normalization of
       persisted note content into a valid block list.
Why:   The same models validate API writes on the server and shape the
       editor's in-memory document on the client, so a block's content
       always matches its type tag.
How:   One model per type, joined into a discriminated union on `type`.
       Each model coerces recoverable content problems to its empty default
       in a `mode="before"` validator; entries that are not objects or carry
       an unknown tag fail validation and surface as BlockShapeError.

Content shapes:
    text     "plain string"
    heading  {"text": str, "level": 1 | 2 | 3}
    todo     {"text": str, "checked": bool}
    table    {"rows": [[str, ...], ...]}
    image    {"src": str, "alt": str, "caption": str | None}
"""

import uuid
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from blocknotes.exceptions import BlockShapeError

BlockType = Literal["text", "heading", "todo", "table", "image"]

BLOCK_TYPES: tuple = ("text", "heading", "todo", "table", "image")

DEFAULT_TABLE_SIZE = 2


def new_block_id() -> str:
    return str(uuid.uuid4())


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class _BlockBase(BaseModel):
    id: str = Field(default_factory=new_block_id, description="Unique within a note")

    @field_validator("id", mode="before")
    @classmethod
    def _fill_missing_id(cls, v: Any) -> str:
        if isinstance(v, str) and v:
            return v
        return new_block_id()


# ══════════════════════════════════════════════════════════════════════════
# Content payloads
# ══════════════════════════════════════════════════════════════════════════


class HeadingContent(BaseModel):
    text: str = ""
    level: Literal[1, 2, 3] = 1

    @field_validator("text", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("level", mode="before")
    @classmethod
    def _level(cls, v: Any) -> int:
        if isinstance(v, int) and not isinstance(v, bool) and v in (1, 2, 3):
            return v
        return 1


class TodoContent(BaseModel):
    text: str = ""
    checked: bool = False

    @field_validator("text", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("checked", mode="before")
    @classmethod
    def _checked(cls, v: Any) -> bool:
        return bool(v)


def _default_rows() -> List[List[str]]:
    return [["" for _ in range(DEFAULT_TABLE_SIZE)] for _ in range(DEFAULT_TABLE_SIZE)]


class TableContent(BaseModel):
    rows: List[List[str]] = Field(default_factory=_default_rows)

    @field_validator("rows", mode="before")
    @classmethod
    def _rows(cls, v: Any) -> List[List[str]]:
        if not isinstance(v, list) or not v or not all(isinstance(row, list) for row in v):
            return _default_rows()
        return [[_as_str(cell) for cell in row] for row in v]


class ImageContent(BaseModel):
    src: str = ""
    alt: str = ""
    caption: Optional[str] = None

    @field_validator("src", "alt", mode="before")
    @classmethod
    def _strings(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("caption", mode="before")
    @classmethod
    def _caption(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


def _payload(model: type, value: Any) -> Any:
    """Anything that is not an object becomes the payload's empty default."""
    return value if isinstance(value, (dict, model)) else model()


# ══════════════════════════════════════════════════════════════════════════
# Blocks
# ══════════════════════════════════════════════════════════════════════════


class TextBlock(_BlockBase):
    type: Literal["text"] = "text"
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> str:
        return _as_str(v)


class HeadingBlock(_BlockBase):
    type: Literal["heading"] = "heading"
    content: HeadingContent = Field(default_factory=HeadingContent)

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> Any:
        return _payload(HeadingContent, v)


class TodoBlock(_BlockBase):
    type: Literal["todo"] = "todo"
    content: TodoContent = Field(default_factory=TodoContent)

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> Any:
        return _payload(TodoContent, v)


class TableBlock(_BlockBase):
    type: Literal["table"] = "table"
    content: TableContent = Field(default_factory=TableContent)

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> Any:
        return _payload(TableContent, v)


class ImageBlock(_BlockBase):
    type: Literal["image"] = "image"
    content: ImageContent = Field(default_factory=ImageContent)

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v: Any) -> Any:
        return _payload(ImageContent, v)


Block = Annotated[
    Union[TextBlock, HeadingBlock, TodoBlock, TableBlock, ImageBlock],
    Field(discriminator="type"),
]

BLOCK_MODELS: Dict[str, type] = {
    "text": TextBlock,
    "heading": HeadingBlock,
    "todo": TodoBlock,
    "table": TableBlock,
    "image": ImageBlock,
}

_block_adapter: TypeAdapter = TypeAdapter(Block)


def create_block(block_type: str) -> Block:
    """
    Build a fresh block of the given type with empty content and a new id.

    Raises:
        BlockShapeError: block_type is not one of BLOCK_TYPES
    """
    try:
        model = BLOCK_MODELS[block_type]
    except KeyError:
        raise BlockShapeError(
            message=f"Unknown block type '{block_type}'",
            context={"type": block_type, "allowed": list(BLOCK_TYPES)},
        )
    return model()


def parse_block(raw: Any, position: Optional[int] = None) -> Block:
    """Validate one stored block entry, coercing recoverable content problems."""
    if isinstance(raw, _BlockBase):
        return raw
    if not isinstance(raw, dict):
        raise BlockShapeError(
            message="Block entry is not an object",
            position=position,
            context={"received": type(raw).__name__},
        )
    try:
        return _block_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise BlockShapeError(
            message=f"Unsupported block type '{raw.get('type')}'",
            position=position,
            context={"errors": e.error_count()},
        )


def normalize_content(raw: Any) -> List[Block]:
    """
    Turn persisted note content into a non-empty, id-unique block list.

    Accepts the legacy plain-string form, the block-array form, and missing
    or garbled values (which become a single empty text block).

    Raises:
        BlockShapeError: an entry is not an object or has an unknown type
    """
    if isinstance(raw, str):
        return [TextBlock(content=raw)]
    if not isinstance(raw, list) or not raw:
        return [TextBlock()]

    blocks: List[Block] = []
    seen = set()
    for position, entry in enumerate(raw):
        block = parse_block(entry, position)
        if block.id in seen:
            block = block.model_copy(update={"id": new_block_id()})
        seen.add(block.id)
        blocks.append(block)
    return blocks


def content_for_storage(raw: Any) -> List[Dict[str, Any]]:
    """
    Block-array form of incoming content, ready for the JSON column.

    Writers always store arrays: a legacy string becomes one text block and
    an empty string or empty list is stored as an empty array.
    """
    if raw in ("", None, []):
        return []
    return [block.model_dump(mode="json") for block in normalize_content(raw)]


def dump_blocks(blocks: List[Block]) -> List[Dict[str, Any]]:
    return [block.model_dump(mode="json") for block in blocks]


def visible_text(block: Block) -> str:
    """The text a user sees in the block's main input field."""
    if isinstance(block, TextBlock):
        return block.content
    if isinstance(block, (HeadingBlock, TodoBlock)):
        return block.content.text
    return ""
