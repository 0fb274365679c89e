"""Field mapping tables between human field labels and Solve360 API identifiers.

Defines:
- FieldMapping: ordered, bidirectional (label, identifier) table for one
  record type. Unique on API identifier; frozen once the type is defined.
- FieldMappingRegistry: process-wide collection of tables keyed by record
  type name, injected into transcoders and controllers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from src.solve360.errors import FieldMappingFrozenError, UnknownRecordTypeError

logger = structlog.get_logger(__name__)


class FieldMapping:
    """Ordered (human label, API identifier) pairs for one record type.

    Pairs are keyed on the API identifier: registering an identifier twice
    replaces its label in place and keeps its original position.

    Args:
        record_type: Name of the record type this table belongs to.
    """

    def __init__(self, record_type: str = "") -> None:
        self.record_type = record_type
        self._by_identifier: dict[str, str] = {}
        self._frozen = False

    @classmethod
    def from_pairs(
        cls,
        pairs: dict[str, str] | Iterable[tuple[str, str]],
        record_type: str = "",
    ) -> FieldMapping:
        """Build and freeze a table from label -> identifier pairs."""
        mapping = cls(record_type)
        items = pairs.items() if isinstance(pairs, dict) else pairs
        for human_label, api_identifier in items:
            mapping.register(human_label, api_identifier)
        return mapping.freeze()

    def register(self, human_label: str, api_identifier: str) -> None:
        """Add one pair. Last write wins on a repeated API identifier."""
        if self._frozen:
            raise FieldMappingFrozenError(
                f"Field mapping for '{self.record_type}' is frozen; "
                f"cannot register '{human_label}' -> '{api_identifier}'"
            )

        existing = self.identifier_for(human_label)
        if existing is not None and existing != api_identifier:
            logger.warning(
                "field_mapping.duplicate_label",
                record_type=self.record_type,
                human_label=human_label,
                existing_identifier=existing,
                new_identifier=api_identifier,
            )

        self._by_identifier[api_identifier] = human_label

    def freeze(self) -> FieldMapping:
        """Lock the table against further registration."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __iter__(self) -> Iterator[tuple[str, str]]:
        """Yield (human label, API identifier) in registration order."""
        for api_identifier, human_label in self._by_identifier.items():
            yield human_label, api_identifier

    def __len__(self) -> int:
        return len(self._by_identifier)

    def __contains__(self, human_label: object) -> bool:
        return human_label in self._by_identifier.values()

    @property
    def labels(self) -> list[str]:
        return list(self._by_identifier.values())

    @property
    def identifiers(self) -> list[str]:
        return list(self._by_identifier)

    def identifier_for(self, human_label: str) -> str | None:
        """Return the API identifier for a label (first match), or None."""
        for api_identifier, label in self._by_identifier.items():
            if label == human_label:
                return api_identifier
        return None

    def label_for(self, api_identifier: str) -> str | None:
        """Return the human label for an API identifier, or None."""
        return self._by_identifier.get(api_identifier)

    def __repr__(self) -> str:
        return f"FieldMapping({self.record_type!r}, {len(self)} fields)"


class FieldMappingRegistry:
    """Field mapping tables for every record type the client knows about.

    Each type is defined exactly once; its table is frozen on definition and
    only read afterwards.
    """

    def __init__(self) -> None:
        self._mappings: dict[str, FieldMapping] = {}

    def define(
        self,
        record_type: str,
        pairs: dict[str, str] | Iterable[tuple[str, str]],
    ) -> FieldMapping:
        """Register and freeze the table for ``record_type``."""
        if record_type in self._mappings:
            raise FieldMappingFrozenError(
                f"Field mapping for '{record_type}' is already defined"
            )
        mapping = FieldMapping.from_pairs(pairs, record_type=record_type)
        self._mappings[record_type] = mapping
        logger.debug(
            "field_mapping.defined",
            record_type=record_type,
            fields=len(mapping),
        )
        return mapping

    def get(self, record_type: str) -> FieldMapping:
        try:
            return self._mappings[record_type]
        except KeyError:
            raise UnknownRecordTypeError(
                f"No field mapping defined for record type '{record_type}'"
            ) from None

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._mappings

    @property
    def record_types(self) -> list[str]:
        return list(self._mappings)
