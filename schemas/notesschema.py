from datetime import datetime
from typing import Any

from pydantic import Field

from schemas.userschema import CamelSchema


class CreateNoteSchema(CamelSchema):
    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None


class EditNoteSchema(CreateNoteSchema):
    is_pinned: bool | None = None


class PinStatusSchema(CamelSchema):
    # checked by the handler, a JSON boolean is the only accepted value
    is_pinned: Any = None


class NoteSchema(CamelSchema):
    id: str
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    is_pinned: bool = False
    user_id: str
    created_at: datetime
    updated_on: datetime
