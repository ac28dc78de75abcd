"""Post records served by the ``/posts`` endpoint."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from uniflow.core.errors import ParseError


class Post(BaseModel):
    """A JSONPlaceholder post.

    Validation is strict: ``"1"`` is not accepted for an integer field, so a
    record either matches the wire shape exactly or is rejected.
    """

    id: int
    title: str
    body: str
    user_id: int = Field(..., alias="userId")

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Post 1",
                "body": "Content of Post 1",
                "userId": 1,
            }
        },
    )

    @classmethod
    def from_json(cls, raw: Any) -> "Post":
        """Validate one wire record.

        Raises:
            ParseError: If ``raw`` does not match the post shape.
        """
        if not isinstance(raw, Mapping):
            raise ParseError(f"Expected an object, got {type(raw).__name__}", raw)
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as ex:
            raise ParseError(str(ex), raw) from ex

    def to_json(self) -> dict[str, Any]:
        """Serialize using the wire field names."""
        return self.model_dump(by_alias=True)


def parse_post(raw: Any) -> Post | None:
    """Return a Post, or None when ``raw`` is not a valid post record."""
    try:
        return Post.from_json(raw)
    except ParseError:
        return None
