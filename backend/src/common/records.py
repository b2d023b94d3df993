"""Helpers shared by the engines for handling submission records"""
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

from src.common.exceptions import InputShapeError

Record = Dict[str, Any]


def ensure_record_batch(records: Any) -> List[Mapping]:
    """
    Check that a batch is a sequence of mappings

    Args:
        records: Batch handed over by the caller

    Returns:
        The batch as a list, in input order

    Raises:
        InputShapeError: If the batch is not a list/tuple, an element is not a
            mapping, or a field name is not a string
    """
    if not isinstance(records, (list, tuple)):
        raise InputShapeError(
            f"records must be a sequence of records, got {type(records).__name__}"
        )

    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InputShapeError(
                f"Record at position {position} must be a mapping, got {type(record).__name__}"
            )
        for field in record:
            if not isinstance(field, str):
                raise InputShapeError(
                    f"Record at position {position} has a non-string field name: {field!r}"
                )

    return list(records)


def is_reserved_field(field: str, prefix: str) -> bool:
    """Check whether a field is a system/metadata field"""
    return bool(prefix) and str(field).startswith(prefix)


def is_missing(value: Any) -> bool:
    """Check whether a value counts as not filled in"""
    return value is None or value == ""


def discover_fields(records: Sequence[Mapping], union: bool = False) -> List[str]:
    """
    Field names to consider for a batch

    By default only the first record is looked at; later records may
    carry fields it lacks and those are left out. With union=True the
    first-seen union over the whole batch is returned instead.
    """
    if not records:
        return []

    if not union:
        return list(records[0].keys())

    fields: Dict[str, None] = {}
    for record in records:
        for field in record.keys():
            fields.setdefault(field, None)
    return list(fields)
