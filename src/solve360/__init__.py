"""Solve360 record synchronization layer.

Translates between human field labels and Solve360 API identifiers,
serializes records to the XML request format, rebuilds records from
responses, and drives the create/update/find/search lifecycle:

- FieldMapping / FieldMappingRegistry: per-type label <-> identifier tables
- RecordTranscoder: field translation and wire (de)serialization
- Record: in-memory record with save() and related-item queueing
- RecordController: lifecycle operations for one record type
- Transport / HttpxTransport: the HTTP collaborator
"""

from src.solve360.config import Settings, get_settings
from src.solve360.controller import ALL, RecordController
from src.solve360.errors import (
    FieldMappingFrozenError,
    MalformedResponseError,
    RecordNotBoundError,
    SaveFailure,
    Solve360Error,
    UnknownRecordTypeError,
)
from src.solve360.field_mapping import FieldMapping, FieldMappingRegistry
from src.solve360.record import Record
from src.solve360.record_types import default_registry
from src.solve360.schemas import RelatedItem
from src.solve360.transcoder import RecordTranscoder
from src.solve360.transport import HttpxTransport, Transport

__all__ = [
    "ALL",
    "FieldMapping",
    "FieldMappingFrozenError",
    "FieldMappingRegistry",
    "HttpxTransport",
    "MalformedResponseError",
    "Record",
    "RecordController",
    "RecordNotBoundError",
    "RecordTranscoder",
    "RelatedItem",
    "SaveFailure",
    "Settings",
    "Solve360Error",
    "Transport",
    "UnknownRecordTypeError",
    "default_registry",
    "get_settings",
]
