"""Inverted index from tag to resource ids."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class TagIndex:
    """Tag -> ids in first-seen order. Built once per rebuild."""

    def __init__(self) -> None:
        self._ids_by_tag: dict[str, list[str]] = {}

    def add(self, resource_id: str, tags: Iterable[str]) -> None:
        for tag in tags:
            ids = self._ids_by_tag.setdefault(tag, [])
            if resource_id not in ids:
                ids.append(resource_id)

    def get(self, tag: str) -> list[str]:
        return list(self._ids_by_tag.get(tag, []))

    def freeze(self) -> Mapping[str, tuple[str, ...]]:
        return {tag: tuple(ids) for tag, ids in self._ids_by_tag.items()}
