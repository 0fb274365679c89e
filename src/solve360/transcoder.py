"""Record transcoding between human field labels and the Solve360 wire format.

RecordTranscoder is bound to one record type's FieldMapping and converts:
- human fields -> API fields (human_to_api) for outgoing requests,
- API fields -> human fields (api_to_human) for incoming responses,
- a Record -> XML request body (serialize_request),
- singular and collection responses -> Record objects.

Leaf values arrive wrapped in a content envelope,
``{"__content__": value, **attributes}``; only the content is kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from html import escape
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from src.solve360.errors import MalformedResponseError
from src.solve360.field_mapping import FieldMapping
from src.solve360.schemas import (
    RecordAttributes,
    RelatedItem,
    envelope_content,
    is_blank,
)

if TYPE_CHECKING:
    from src.solve360.record import Record

logger = structlog.get_logger(__name__)

FIND_ALL_BODY = "<request><layout>1</layout></request>"


def is_record_entry(entry: Any) -> bool:
    """True if a collection entry has the wire shape of a record.

    Collection responses mix records (mappings carrying an ``id``) with
    bookkeeping scalars such as ``status`` and ``count``.
    """
    return isinstance(entry, Mapping) and "id" in entry


def _response_body(response: Any) -> Mapping[str, Any]:
    if not isinstance(response, Mapping) or not isinstance(response.get("response"), Mapping):
        raise MalformedResponseError("response")
    return response["response"]


def _normalize_related(related: Any) -> list[RelatedItem]:
    if related is None:
        return []
    items = related if isinstance(related, list) else [related]
    try:
        return [RelatedItem.coerce(item) for item in items]
    except ValidationError as exc:
        raise MalformedResponseError("relatedto", "related item without an id") from exc


class RecordTranscoder:
    """Translate records of one type to and from the wire format.

    Stateless apart from the frozen field mapping it reads, so one instance
    can serve any number of concurrent calls.

    Args:
        mapping: Field mapping table for the record type.
    """

    def __init__(self, mapping: FieldMapping) -> None:
        self.mapping = mapping

    # ── Field translation ─────────────────────────────────────────────────

    def human_to_api(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Map human labels to API identifiers, dropping blank values.

        Example:
            human_to_api({"First Name": "Steve", "Description": "Web Developer"})
            => {"firstname": "Steve", "custom12345": "Web Developer"}
        """
        mapped: dict[str, Any] = {}
        for human_label, api_identifier in self.mapping:
            value = fields.get(human_label)
            if not is_blank(value):
                mapped[api_identifier] = value
        return mapped

    def api_to_human(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """As human_to_api but API -> human, unwrapping content envelopes."""
        mapped: dict[str, Any] = {}
        for human_label, api_identifier in self.mapping:
            if api_identifier not in fields:
                continue
            content = envelope_content(fields[api_identifier])
            if content is not None:
                mapped[human_label] = content
        return mapped

    # ── Serialization ─────────────────────────────────────────────────────

    def serialize_request(self, record: Record) -> str:
        """Build the XML request body for a create or update."""
        parts = ["<request>"]

        for api_identifier, value in self.human_to_api(record.fields).items():
            parts.append(f"<{api_identifier}>{escape(str(value))}</{api_identifier}>")

        if record.related_items_to_add:
            parts.append("<relateditems>")
            for related_item in record.related_items_to_add:
                parts.append(
                    f"<add><relatedto><id>{escape(str(related_item.id))}</id></relatedto></add>"
                )
            parts.append("</relateditems>")

        ownership = "" if record.ownership is None else escape(str(record.ownership))
        parts.append(f"<ownership>{ownership}</ownership>")
        parts.append("</request>")

        body = "".join(parts)
        logger.debug(
            "transcoder.request_serialized",
            record_type=self.mapping.record_type,
            record_id=record.id,
            length=len(body),
        )
        return body

    # ── Deserialization ───────────────────────────────────────────────────

    def deserialize_singular(self, response: Mapping[str, Any]) -> Record:
        """Rebuild a Record from a single-item response."""
        from src.solve360.record import Record

        body = _response_body(response)
        item = body.get("item")
        if not isinstance(item, Mapping):
            raise MalformedResponseError("item")
        if "fields" not in item:
            raise MalformedResponseError("fields", f"item {item.get('id')!r} has no field block")

        api_fields = item["fields"] or {}
        if not isinstance(api_fields, Mapping):
            raise MalformedResponseError("fields", "expected a mapping")

        attributes = {
            name: item[name] for name in RecordAttributes.model_fields if name in item
        }
        record = Record(fields=self.api_to_human(api_fields), **attributes)

        related = body.get("relateditems")
        if isinstance(related, Mapping):
            record.related_items = _normalize_related(related.get("relatedto"))

        return record

    def deserialize_collection(self, response: Mapping[str, Any]) -> list[Record]:
        """Rebuild Records from a collection response, in response order.

        Entries that are not records (see is_record_entry) are skipped.
        """
        from src.solve360.record import Record

        body = _response_body(response)

        records: list[Record] = []
        skipped = 0
        for entry in body.values():
            if not is_record_entry(entry):
                skipped += 1
                continue
            records.append(Record(id=entry["id"], fields=self.api_to_human(entry)))

        logger.debug(
            "transcoder.collection_deserialized",
            record_type=self.mapping.record_type,
            records=len(records),
            skipped=skipped,
        )
        return records
