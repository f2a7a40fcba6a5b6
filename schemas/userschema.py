from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserCredsSchema(CamelSchema):
    email: str | None = None
    password: str | None = None


class CreateAccountSchema(UserCredsSchema):
    full_name: str | None = None


class UserPublicSchema(CamelSchema):
    id: str
    full_name: str
    email: str
    created_at: datetime


class UserSchema(UserPublicSchema):
    password: str
