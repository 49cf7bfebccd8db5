"""
Field resolution against a parsed record.

Fields are resolved in declared order and resolution stops at the first
field whose key is not in the record. Explicit keys are used verbatim;
otherwise the record key whose normalized form equals the field name wins.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from .models import ExplicitKey, FieldSpec, KeyStrategy, ResolvedField
from .normalize import normalize_key


class MissingKey(KeyError):
    def __init__(self, field: str, searched_key: str):
        super().__init__(field, searched_key)
        self.field = field
        self.searched_key = searched_key

    def __str__(self) -> str:
        return f"no value for field {self.field!r} (searched key {self.searched_key!r})"

    def to_dict(self) -> Dict[str, str]:
        return {
            "error": "missing_key",
            "field": self.field,
            "searched_key": self.searched_key,
        }


def convert_record_keys(record: Mapping[str, Any]) -> Dict[str, str]:
    """
    Map each normalized key to the record key it came from.

    When two record keys normalize to the same name the first one wins.
    """
    converted: Dict[str, str] = {}
    for raw_key in record:
        converted.setdefault(normalize_key(raw_key), raw_key)
    return converted


def _find_normalized(record: Mapping[str, Any], name: str) -> Optional[str]:
    for raw_key in record:
        if normalize_key(raw_key) == name:
            return raw_key
    return None


def resolve_key(
    record: Mapping[str, Any],
    field: FieldSpec,
    strategy: KeyStrategy = KeyStrategy.USE_KEYS,
) -> str:
    """Return the record key holding the value for `field`, or raise MissingKey."""
    if isinstance(field.source, ExplicitKey):
        searched = field.source.key
        if strategy is KeyStrategy.CONVERT_FROM_SNAKE_CASE:
            found = convert_record_keys(record).get(searched)
        else:
            found = searched if searched in record else None
    else:
        searched = field.name
        found = _find_normalized(record, searched)

    if found is None:
        raise MissingKey(field.name, searched)
    return found


def resolve_fields_with_report(
    record: Mapping[str, Any],
    fields: Sequence[FieldSpec],
    strategy: KeyStrategy = KeyStrategy.USE_KEYS,
) -> tuple[Dict[str, Any], list[ResolvedField]]:
    values: Dict[str, Any] = {}
    resolved: list[ResolvedField] = []

    for field in fields:
        key = resolve_key(record, field, strategy)
        values[field.name] = record[key]
        resolved.append(ResolvedField(field=field.name, key=key, source=field.source.kind))

    return values, resolved


def resolve_fields(
    record: Mapping[str, Any],
    fields: Sequence[FieldSpec],
    strategy: KeyStrategy = KeyStrategy.USE_KEYS,
) -> Dict[str, Any]:
    """
    Bind every field in `fields` to its value in `record`.

    Raises MissingKey for the first field that cannot be found; no partial
    result is returned.
    """
    values, _ = resolve_fields_with_report(record, fields, strategy)
    return values
