"""Pydantic schemas for Solve360 record payloads.

Defines:
- RelatedItem: a link from one record to another, addressed by id.
- RecordAttributes: the known scalar attributes every record type carries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

CONTENT_KEY = "__content__"


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty or whitespace only."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def envelope_content(value: Any) -> Any:
    """Extract the content of a wire value, or None when it has none.

    Content envelopes yield their ``__content__`` entry. Envelopes without
    content (attributes only) yield None. Bare scalars, as sent in JSON
    responses, are their own content.
    """
    if isinstance(value, Mapping):
        content = value.get(CONTENT_KEY)
    else:
        content = value
    return None if is_blank(content) else content


class RelatedItem(BaseModel):
    """A link descriptor pointing at another record.

    Only ``id`` is required. Anything else the service returns alongside it
    (name, typeid, ...) is kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # The service returns ids as numbers in JSON and as text in XML
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, Mapping):
            return value.get(CONTENT_KEY)
        return value

    @classmethod
    def coerce(cls, item: RelatedItem | dict[str, Any] | str | int) -> RelatedItem:
        """Build a RelatedItem from a model, a mapping, or a bare id."""
        if isinstance(item, cls):
            return item
        if isinstance(item, dict):
            return cls.model_validate(item)
        return cls(id=item)


class RecordAttributes(BaseModel):
    """Known scalar attributes of a record.

    Timestamps are kept as the strings the service sends; the record layer
    never does arithmetic on them.
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = None
    typeid: str | None = None
    name: str | None = None
    created: str | None = None
    updated: str | None = None
    viewed: str | None = None
    ownership: str | None = None
    flagged: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            value = envelope_content(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, bool):
            return "1" if value else "0"
        return value
