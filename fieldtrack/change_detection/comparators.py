"""
Type Comparators

One pure comparison function per semantic field type. Every comparator
answers "are these two values equal for this type?" and never raises:
malformed values fall back to strict equality instead of being validated.
"""

from datetime import date, datetime
from numbers import Number
from typing import Any, Callable, Dict, List, Mapping, Union

from dateutil.tz import tzlocal

from .change_detection_models import FieldType, MISSING, coerce_field_type


def strict_equals(previous: Any, current: Any) -> bool:
    """Equality without cross-type coercion.

    Booleans only equal booleans, numbers compare numerically across numeric
    types, and everything else must share a type to be equal.
    """
    if previous is current:
        return True
    if previous is MISSING or current is MISSING:
        return False
    try:
        if isinstance(previous, bool) or isinstance(current, bool):
            return type(previous) is type(current) and previous == current
        if isinstance(previous, Number) and isinstance(current, Number):
            return bool(previous == current)
        return type(previous) is type(current) and bool(previous == current)
    except (TypeError, ValueError, ArithmeticError):
        return False


def is_nan(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    try:
        return value != value
    except (TypeError, ValueError, ArithmeticError):
        # Decimal signalling NaN refuses to compare
        return True


def compare_true_false(previous: Any, current: Any) -> bool:
    return strict_equals(previous, current)


def compare_text(previous: Any, current: Any, trim_to_compare: bool = False) -> bool:
    if trim_to_compare:
        previous = previous.strip() if isinstance(previous, str) else previous
        current = current.strip() if isinstance(current, str) else current
    return strict_equals(previous, current)


def compare_numeric(previous: Any, current: Any) -> bool:
    # NaN on both sides is a stable value, not a change
    if is_nan(previous) and is_nan(current):
        return True
    return strict_equals(previous, current)


def is_valid_date(value: Any) -> bool:
    return isinstance(value, date)


def _as_instant(value: date) -> datetime:
    """Aware datetime for a date value; naive values are read as local time."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.replace(tzinfo=tzlocal())
    return value


def compare_dates(previous: Any, current: Any) -> bool:
    previous_valid = is_valid_date(previous)
    current_valid = is_valid_date(current)
    if previous_valid != current_valid:
        return False
    if not previous_valid:
        return strict_equals(previous, current)
    try:
        return _as_instant(previous) == _as_instant(current)
    except (OverflowError, ValueError, OSError):
        # Out of range for local time conversion; fall back to raw equality
        return strict_equals(previous, current)


def _link_sort_key(link_id: Any):
    return (str(link_id), type(link_id).__name__)


def _is_blank_link_id(link_id: Any) -> bool:
    """Missing, empty, zero, false and NaN identifiers do not reference a record."""
    if link_id is None or link_id is MISSING or link_id == "":
        return True
    if isinstance(link_id, Number):
        return is_nan(link_id) or link_id == 0
    return False


def normalize_link(link: Any) -> List[Any]:
    """Canonical identifier list for a link value.

    A list (or tuple) of reference mappings is used as is, a single mapping
    becomes a one-element list and anything else is empty. Entries that are
    not mappings or carry a blank ``_id`` are dropped, the rest are sorted by
    identifier and deduplicated.
    """
    if isinstance(link, (list, tuple)):
        entries = list(link)
    elif isinstance(link, Mapping):
        entries = [link]
    else:
        entries = []

    identifiers = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        link_id = entry.get("_id")
        if _is_blank_link_id(link_id):
            continue
        identifiers.append(link_id)

    identifiers.sort(key=_link_sort_key)

    normalized = []
    seen = set()
    for link_id in identifiers:
        key = _link_sort_key(link_id)
        if key not in seen:
            seen.add(key)
            normalized.append(link_id)
    return normalized


def compare_links(previous: Any, current: Any) -> bool:
    previous_ids = normalize_link(previous)
    current_ids = normalize_link(current)
    if len(previous_ids) != len(current_ids):
        return False
    return all(strict_equals(p, c) for p, c in zip(previous_ids, current_ids))


_COMPARATORS: Dict[FieldType, Callable[[Any, Any], bool]] = {
    FieldType.TRUE_FALSE: compare_true_false,
    FieldType.NUMERIC: compare_numeric,
    FieldType.DATE: compare_dates,
    FieldType.LINK: compare_links,
}


def compare(field_type: Union[FieldType, str], previous: Any, current: Any,
            trim_to_compare: bool = False) -> bool:
    """Compare two values according to the semantics of ``field_type``.

    Args:
        field_type: Declared type of the field; unknown types always compare equal
        previous: Baseline value (may be ``MISSING``)
        current: Current value (may be ``MISSING``)
        trim_to_compare: Strip surrounding whitespace from text before comparing

    Returns:
        True if the values are equal for this type
    """
    field_type = coerce_field_type(field_type)
    if field_type == FieldType.TEXT:
        return compare_text(previous, current, trim_to_compare)
    comparator = _COMPARATORS.get(field_type)
    if comparator is None:
        return True
    return comparator(previous, current)
