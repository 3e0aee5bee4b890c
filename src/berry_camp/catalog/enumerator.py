"""Enumeration of navigable catalog pages."""

import logging
from typing import Iterator, NamedTuple

from .store import CatalogStore


class ChapterKey(NamedTuple):
    """Path parameters of a chapter page."""
    area_id: str
    chapter_id: str

    @property
    def path(self) -> str:
        return f"/{self.area_id}/{self.chapter_id}"


class AddressEnumerator:
    """Lists every (area, chapter) page the catalog defines.

    Only area and chapter granularity is enumerated; room and subroom
    selection lives in the query string and is resolved per request.
    Iteration is lazy and restartable: each call walks the store again
    and yields the same sequence.
    """

    def __init__(self, store: CatalogStore):
        self.store = store
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def __iter__(self) -> Iterator[ChapterKey]:
        for area in self.store.iter_areas():
            for chapter_id in area.chapters:
                yield ChapterKey(area.id, chapter_id)

    def __len__(self) -> int:
        return self.store.chapter_count

    def iter_area_ids(self) -> Iterator[str]:
        """Yield area page ids in catalog order."""
        yield from self.store.area_ids

    def iter_paths(self) -> Iterator[str]:
        """Yield ``/{area}/{chapter}`` paths for every chapter page."""
        count = 0
        for key in self:
            count += 1
            yield key.path
        self.logger.debug(f"Enumerated {count} chapter paths")
