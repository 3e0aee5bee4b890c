"""
Immutable in-memory catalog of areas, chapters, sides and rooms.

The store is built once, validated on construction and never mutated.
Lookups for user supplied ids return None instead of raising; callers
decide whether absence is fatal.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..settings.types import ValidationResult
from .loader import CatalogLoader
from .models import Area, Chapter, Room, Side, Subroom
from .schema import CatalogIntegrityError, CatalogSchema

logger = logging.getLogger(__name__)


class CatalogStore:
    """Read-only lookup over the catalog tree.

    Build instances with :meth:`from_dict` or :meth:`load`; both validate
    the data and raise CatalogIntegrityError when references do not
    resolve.
    """

    def __init__(
        self,
        areas: Mapping[str, Area],
        chapters: Mapping[str, Mapping[str, Chapter]],
        validation: Optional[ValidationResult] = None,
    ):
        self._areas: Mapping[str, Area] = MappingProxyType(dict(areas))
        self._chapters: Mapping[str, Mapping[str, Chapter]] = MappingProxyType(
            {area_id: MappingProxyType(dict(c)) for area_id, c in chapters.items()}
        )
        self.validation = validation or ValidationResult(is_valid=True, errors=[], warnings=[])

    # === CONSTRUCTION ===

    @classmethod
    def from_dict(cls, data: Any) -> "CatalogStore":
        """Validate a catalog document and build the store.

        Args:
            data: Parsed catalog document

        Returns:
            Populated CatalogStore

        Raises:
            CatalogIntegrityError: If the document is malformed or references
                undefined records
        """
        errors = CatalogSchema.validate_catalog(data)
        if errors:
            logger.error(f"Catalog validation failed with {len(errors)} error(s)")
            for error in errors:
                logger.error(f"  {error}")
            raise CatalogIntegrityError(errors)

        areas = {area_id: Area.from_dict(area_id, raw) for area_id, raw in data["areas"].items()}
        chapters: Dict[str, Dict[str, Chapter]] = {}
        sides: Dict[str, Side] = {}
        for area_id, raw_chapters in data.get("chapters", {}).items():
            built = chapters.setdefault(area_id, {})
            for chapter_id, raw in raw_chapters.items():
                chapter = Chapter.from_dict(chapter_id, raw)
                built[chapter_id] = chapter
                for side_id, side in chapter.sides.items():
                    sides[f"{area_id}/{chapter_id}/{side_id}"] = side

        warnings = CatalogSchema.collect_warnings(data, sides)
        for warning in warnings:
            logger.warning(warning)

        store = cls(areas, chapters, ValidationResult(is_valid=True, errors=[], warnings=warnings))
        logger.info(
            f"Catalog loaded: {len(areas)} areas, {store.chapter_count} chapters, "
            f"{len(sides)} sides ({len(warnings)} warning(s))"
        )
        return store

    @classmethod
    def load(cls, path: Union[str, Path], loader: Optional[CatalogLoader] = None) -> "CatalogStore":
        """Load and validate a catalog file or directory."""
        loader = loader or CatalogLoader()
        return cls.from_dict(loader.load(Path(path)))

    # === LOOKUPS ===

    def get_area(self, area_id: str) -> Optional[Area]:
        return self._areas.get(area_id)

    def get_chapter(self, area_id: str, chapter_id: str) -> Optional[Chapter]:
        """Return a chapter only if its area lists it."""
        area = self._areas.get(area_id)
        if area is None or chapter_id not in area.chapters:
            return None
        return self._chapters.get(area_id, {}).get(chapter_id)

    def get_side(self, area_id: str, chapter_id: str, side_id: str) -> Optional[Side]:
        chapter = self.get_chapter(area_id, chapter_id)
        return chapter.get_side(side_id) if chapter else None

    def get_room(
        self, area_id: str, chapter_id: str, side_id: str, room_id: str
    ) -> Optional[Room]:
        side = self.get_side(area_id, chapter_id, side_id)
        return side.get_room(room_id) if side else None

    def get_subroom(
        self, area_id: str, chapter_id: str, side_id: str, room_id: str, index: int
    ) -> Optional[Subroom]:
        """Return a subroom by its 1-based index."""
        room = self.get_room(area_id, chapter_id, side_id, room_id)
        return room.get_subroom(index) if room else None

    # === TRAVERSAL ===

    @property
    def area_ids(self) -> Tuple[str, ...]:
        return tuple(self._areas)

    @property
    def chapter_count(self) -> int:
        return sum(len(area.chapters) for area in self._areas.values())

    def iter_areas(self) -> Iterator[Area]:
        """Yield areas in catalog order."""
        yield from self._areas.values()

    def iter_chapters(self, area_id: str) -> Iterator[Chapter]:
        """Yield an area's chapters in the order the area lists them."""
        area = self._areas.get(area_id)
        if area is None:
            return
        area_chapters = self._chapters.get(area_id, {})
        for chapter_id in area.chapters:
            yield area_chapters[chapter_id]

    def adjacent_chapters(
        self, area_id: str, chapter_id: str
    ) -> Tuple[Optional[Chapter], Optional[Chapter]]:
        """Return the (previous, next) chapters around a chapter.

        Either side is None at the ends of the area or when the chapter is
        unknown.
        """
        area = self._areas.get(area_id)
        if area is None or chapter_id not in area.chapters:
            return None, None
        chapters: List[Chapter] = list(self.iter_chapters(area_id))
        index = area.chapters.index(chapter_id)
        previous = chapters[index - 1] if index > 0 else None
        following = chapters[index + 1] if index + 1 < len(chapters) else None
        return previous, following
