"""In-memory representation of a Solve360 record.

A Record carries identity, the known scalar attributes, free-form custom
fields keyed by human label, and two related-item collections: links the
service has confirmed and links queued for the next save.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

from src.solve360.errors import MalformedResponseError, RecordNotBoundError, SaveFailure
from src.solve360.schemas import RecordAttributes, RelatedItem
from src.solve360.transcoder import is_blank

if TYPE_CHECKING:
    from src.solve360.controller import RecordController

logger = structlog.get_logger(__name__)


class Record:
    """A Solve360 record (contact, company, ...).

    Known attributes are validated through RecordAttributes, so an unknown
    keyword raises pydantic.ValidationError instead of being set silently.

    Args:
        fields: Custom field values keyed by human label.
        related_items: Links already confirmed by the service.
        controller: Lifecycle controller used by save(). Records rebuilt
            from responses are bound by the controller that fetched them.
        **attributes: Any of id, typeid, name, created, updated, viewed,
            ownership, flagged.
    """

    def __init__(
        self,
        fields: dict[str, Any] | None = None,
        related_items: list[RelatedItem | dict[str, Any] | str] | None = None,
        controller: RecordController | None = None,
        **attributes: Any,
    ) -> None:
        known = RecordAttributes(**attributes)

        self.id: str | None = known.id
        self.typeid: str | None = known.typeid
        self.name: str | None = known.name
        self.created: str | None = known.created
        self.updated: str | None = known.updated
        self.viewed: str | None = known.viewed
        self.ownership: str | None = known.ownership
        self.flagged: str | None = known.flagged

        self.fields: dict[str, Any] = dict(fields or {})
        self.related_items: list[RelatedItem] = [
            RelatedItem.coerce(item) for item in related_items or []
        ]
        self.related_items_to_add: list[RelatedItem] = []

        self._controller = controller
        self._save_lock = asyncio.Lock()

    def bind(self, controller: RecordController) -> Record:
        """Attach the lifecycle controller used by save()."""
        self._controller = controller
        return self

    @property
    def controller(self) -> RecordController:
        if self._controller is None:
            raise RecordNotBoundError(
                "Record is not bound to a RecordController; "
                "create it with RecordController.new() or call bind()"
            )
        return self._controller

    def is_new_record(self) -> bool:
        return self.id is None

    def add_related_item(self, item: RelatedItem | dict[str, Any] | str | int) -> None:
        """Queue a link to another record for the next save."""
        self.related_items_to_add.append(RelatedItem.coerce(item))

    def map_human_fields(self) -> dict[str, Any]:
        """This record's fields keyed by API identifier (blank values dropped)."""
        return self.controller.transcoder.human_to_api(self.fields)

    def to_request(self) -> str:
        return self.controller.transcoder.serialize_request(self)

    def attributes(self) -> dict[str, Any]:
        """Known scalar attributes as a dict."""
        return {name: getattr(self, name) for name in RecordAttributes.model_fields}

    async def save(self) -> dict[str, Any]:
        """Create the record on the CRM if new, otherwise update it.

        Saves of the same record are serialized so two concurrent creates
        cannot both assign an id.

        Returns:
            The parsed response from the API.

        Raises:
            SaveFailure: The response carried an error map.
            MalformedResponseError: A create response had no item id.
        """
        controller = self.controller

        async with self._save_lock:
            if is_blank(self.ownership):
                self.ownership = controller.settings.SOLVE360_DEFAULT_OWNERSHIP or None

            creating = self.is_new_record()
            if creating:
                response = await controller.request(
                    "POST", f"/{controller.resource_name}", self.to_request()
                )
            else:
                response = await controller.request(
                    "PUT", f"/{controller.resource_name}/{self.id}", self.to_request()
                )

            body = response.get("response") if isinstance(response, dict) else None
            if not isinstance(body, dict):
                raise MalformedResponseError("response")

            errors = body.get("errors")
            if errors:
                logger.warning(
                    "solve360.save_failed",
                    record_type=controller.record_type,
                    record_id=self.id,
                    fields=list(errors) if isinstance(errors, dict) else None,
                )
                if not isinstance(errors, dict):
                    errors = {"error": errors}
                raise SaveFailure(errors)

            if creating:
                item = body.get("item")
                if not isinstance(item, dict) or is_blank(item.get("id")):
                    raise MalformedResponseError("item", "create response has no id")
                self.id = RecordAttributes(id=item["id"]).id

            self.related_items.extend(self.related_items_to_add)
            self.related_items_to_add = []

            logger.info(
                "solve360.record_created" if creating else "solve360.record_updated",
                record_type=controller.record_type,
                record_id=self.id,
            )
            return response

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} name={self.name!r} fields={len(self.fields)}>"
