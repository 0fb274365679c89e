"""Record lifecycle controller -- create, update, find and search one record type.

RecordController combines a type's RecordTranscoder with the injected
Transport and Settings. It owns request construction (URL, headers, basic
auth) and binds every Record it builds or fetches so record.save() can
route back through it.
"""

from __future__ import annotations

from typing import Any, Final

import structlog

from src.solve360.config import Settings, get_settings
from src.solve360.field_mapping import FieldMappingRegistry
from src.solve360.naming import resource_name
from src.solve360.record import Record
from src.solve360.transcoder import FIND_ALL_BODY, RecordTranscoder
from src.solve360.transport import Transport

logger = structlog.get_logger(__name__)

ALL: Final = "all"

REQUEST_HEADERS: Final = {
    "Content-Type": "application/xml",
    "Accept": "application/json",
}


class RecordController:
    """Lifecycle operations for one Solve360 record type.

    Args:
        record_type: Record type name, e.g. "Contact". Must be defined in
            the registry.
        registry: Field mapping registry holding the type's table.
        transport: Transport used to reach the API.
        settings: Client settings. Defaults to get_settings().
    """

    def __init__(
        self,
        record_type: str,
        registry: FieldMappingRegistry,
        transport: Transport,
        settings: Settings | None = None,
    ) -> None:
        self.record_type = record_type
        self.mapping = registry.get(record_type)
        self.transcoder = RecordTranscoder(self.mapping)
        self.transport = transport
        self.settings = settings or get_settings()

    @property
    def resource_name(self) -> str:
        return resource_name(self.record_type)

    def new(self, fields: dict[str, Any] | None = None, **attributes: Any) -> Record:
        """Build an unsaved record bound to this controller."""
        return Record(fields=fields, controller=self, **attributes)

    async def create(self, fields: dict[str, Any] | None = None, **attributes: Any) -> Record:
        """Create a record on the CRM and return it.

        Raises:
            SaveFailure: The service rejected the record.
        """
        record = self.new(fields, **attributes)
        await record.save()
        return record

    async def find(self, id: str | int, query: dict[str, Any] | None = None) -> Record | list[Record]:
        """Find one record by id, or every record when id is ALL."""
        if id == ALL:
            return await self.find_all(query)
        return await self.find_one(id, query)

    async def find_one(self, id: str | int, query: dict[str, Any] | None = None) -> Record:
        response = await self.request("GET", f"/{self.resource_name}/{id}", query=query)
        return self.transcoder.deserialize_singular(response).bind(self)

    async def find_all(self, query: dict[str, Any] | None = None) -> list[Record]:
        response = await self.request("GET", f"/{self.resource_name}/", FIND_ALL_BODY, query)
        records = self.transcoder.deserialize_collection(response)
        for record in records:
            record.bind(self)
        logger.info(
            "solve360.records_found",
            record_type=self.record_type,
            count=len(records),
            query=query,
        )
        return records

    async def search(self, filter_mode: str, value: Any) -> list[Record]:
        """find_all constrained by one filter mode/value pair."""
        return await self.find_all({"filtermode": filter_mode, "filtervalue": value})

    async def request(
        self,
        method: str,
        path: str,
        body: str = "",
        query: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request for this record type through the transport."""
        url = f"{self.settings.base_url}{path}"
        logger.debug(
            "solve360.request",
            method=method,
            url=url,
            record_type=self.record_type,
        )
        return await self.transport.execute(
            method,
            url,
            headers=dict(REQUEST_HEADERS),
            body=body,
            query=query,
            auth=self.settings.basic_auth,
        )
