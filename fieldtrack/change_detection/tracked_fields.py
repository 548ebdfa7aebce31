"""
Tracked-Field Set

The ordered subset of a schema's field identifiers that take part in
change detection.
"""

from typing import Iterable, Iterator, List, Union


def _as_ids(field_ids: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(field_ids, str):
        return [field_ids]
    return list(field_ids)


class TrackedFieldSet:
    """Ordered, duplicate-free set of tracked field identifiers.

    Only identifiers that exist in the schema can be tracked; others are
    silently dropped on add.
    """

    def __init__(self, schema_field_ids: Iterable[str]):
        schema_field_ids = _as_ids(schema_field_ids)
        self._schema_ids = frozenset(schema_field_ids)
        self._tracked: List[str] = []
        self.add(schema_field_ids)

    def clear(self) -> None:
        self._tracked = []

    def add(self, field_ids: Union[str, Iterable[str]]) -> None:
        for field_id in _as_ids(field_ids):
            if field_id in self._schema_ids and field_id not in self._tracked:
                self._tracked.append(field_id)

    def remove(self, field_ids: Union[str, Iterable[str]]) -> None:
        removed = set(_as_ids(field_ids))
        self._tracked = [field_id for field_id in self._tracked if field_id not in removed]

    def as_list(self) -> List[str]:
        return list(self._tracked)

    def __iter__(self) -> Iterator[str]:
        # Iterate over a copy so the set can change while a pass is running
        return iter(list(self._tracked))

    def __len__(self) -> int:
        return len(self._tracked)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._tracked

    def __repr__(self) -> str:
        return f"TrackedFieldSet({self._tracked!r})"
