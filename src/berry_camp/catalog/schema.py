"""Schema and integrity checks for catalog JSON.

Catalog data is build-time input, so structural problems are fatal and
reported all at once. Problems the browser can live with (dangling room
ids in a checkpoint, a stale room count) come back as warnings.
"""

import re
from collections import Counter
from typing import Any, Dict, List, Mapping, cast

from .models import SIDE_IDS, Side

SLUG_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]*$")


class CatalogLoadError(ValueError):
    """Raised when catalog files cannot be read or parsed."""


class CatalogIntegrityError(ValueError):
    """Raised when catalog data references undefined or malformed records."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        details = "\n  - ".join(self.errors)
        super().__init__(f"Invalid catalog data:\n  - {details}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CatalogSchema:
    """Validation of the catalog document.

    Provides validation methods to ensure the document conforms to the
    expected format and that every cross reference resolves.
    """

    REQUIRED_AREA_FIELDS = {"gameId", "name", "chapters"}
    REQUIRED_CHAPTER_FIELDS = {"gameId", "name", "image", "sides"}
    REQUIRED_SIDE_FIELDS = {"name", "roomCount", "checkpoints", "rooms"}
    REQUIRED_ROOM_FIELDS = {"image", "defaultSpawn"}

    @staticmethod
    def validate_slug(value: Any, what: str) -> List[str]:
        if not isinstance(value, str) or not SLUG_PATTERN.match(value):
            return [f"{what} {value!r} is not a valid id"]
        return []

    @staticmethod
    def validate_room(room_id: str, data: Any) -> List[str]:
        """Validate a room record.

        Args:
            room_id: Key of the room in its side
            data: Raw room record

        Returns:
            List of error messages (empty if valid)
        """
        errors = CatalogSchema.validate_slug(room_id, "Room id")
        if not isinstance(data, dict):
            return errors + [f"Room '{room_id}' must be an object"]

        room = cast(Dict[str, Any], data)
        missing = CatalogSchema.REQUIRED_ROOM_FIELDS - room.keys()
        if missing:
            errors.append(f"Room '{room_id}' missing required fields: {sorted(missing)}")
            return errors

        spawn = room["defaultSpawn"]
        if not isinstance(spawn, dict) or not all(
            _is_number(cast(Dict[str, Any], spawn).get(axis)) for axis in ("x", "y")
        ):
            errors.append(f"Room '{room_id}' 'defaultSpawn' must have numeric 'x' and 'y'")

        subrooms = room.get("subrooms")
        if subrooms is not None:
            if not isinstance(subrooms, list):
                errors.append(f"Room '{room_id}' 'subrooms' must be an array")
            else:
                for index, subroom in enumerate(cast(List[Any], subrooms), start=1):
                    if not isinstance(subroom, dict) or not {"name", "image"} <= subroom.keys():
                        errors.append(
                            f"Room '{room_id}' subroom {index} must have 'name' and 'image'"
                        )
        return errors

    @staticmethod
    def validate_side(side_id: str, data: Any) -> List[str]:
        """Validate a side record, its checkpoints and rooms."""
        if side_id not in SIDE_IDS:
            return [f"Side id {side_id!r} must be one of {list(SIDE_IDS)}"]
        if not isinstance(data, dict):
            return [f"Side '{side_id}' must be an object"]

        side = cast(Dict[str, Any], data)
        missing = CatalogSchema.REQUIRED_SIDE_FIELDS - side.keys()
        if missing:
            return [f"Side '{side_id}' missing required fields: {sorted(missing)}"]

        errors: List[str] = []
        room_count = side["roomCount"]
        if not isinstance(room_count, int) or isinstance(room_count, bool) or room_count < 0:
            errors.append(f"Side '{side_id}' 'roomCount' must be a non-negative integer")

        rooms = side["rooms"]
        if not isinstance(rooms, dict):
            errors.append(f"Side '{side_id}' 'rooms' must be an object")
        else:
            for room_id, room in cast(Dict[str, Any], rooms).items():
                errors.extend(
                    f"Side '{side_id}': {err}" for err in CatalogSchema.validate_room(room_id, room)
                )

        checkpoints = side["checkpoints"]
        if not isinstance(checkpoints, list):
            errors.append(f"Side '{side_id}' 'checkpoints' must be an array")
            return errors

        names: List[str] = []
        listed: List[str] = []
        for index, checkpoint in enumerate(cast(List[Any], checkpoints)):
            if not isinstance(checkpoint, dict) or not isinstance(checkpoint.get("name"), str):
                errors.append(f"Side '{side_id}' checkpoint {index} must have a 'name'")
                continue
            order = checkpoint.get("roomOrder", [])
            if not isinstance(order, list):
                errors.append(f"Side '{side_id}' checkpoint {index} 'roomOrder' must be an array")
                continue
            names.append(checkpoint["name"])
            listed.extend(str(room_id) for room_id in cast(List[Any], order))

        for name, count in Counter(names).items():
            if count > 1:
                errors.append(f"Side '{side_id}' has duplicate checkpoint '{name}'")
        for room_id, count in Counter(listed).items():
            if count > 1:
                errors.append(f"Side '{side_id}' lists room '{room_id}' in {count} checkpoints")

        return errors

    @staticmethod
    def validate_chapter(chapter_id: str, data: Any) -> List[str]:
        """Validate a chapter record and all of its sides."""
        errors = CatalogSchema.validate_slug(chapter_id, "Chapter id")
        if not isinstance(data, dict):
            return errors + [f"Chapter '{chapter_id}' must be an object"]

        chapter = cast(Dict[str, Any], data)
        missing = CatalogSchema.REQUIRED_CHAPTER_FIELDS - chapter.keys()
        if missing:
            errors.append(f"Chapter '{chapter_id}' missing required fields: {sorted(missing)}")
            return errors

        chapter_no = chapter.get("chapterNo")
        if chapter_no is not None and (
            not isinstance(chapter_no, int) or isinstance(chapter_no, bool) or chapter_no < 0
        ):
            errors.append(f"Chapter '{chapter_id}' 'chapterNo' must be a non-negative integer")

        sides = chapter["sides"]
        if not isinstance(sides, dict) or not sides:
            errors.append(f"Chapter '{chapter_id}' must define at least one side")
            return errors

        for side_id, side in cast(Dict[str, Any], sides).items():
            errors.extend(
                f"Chapter '{chapter_id}': {err}" for err in CatalogSchema.validate_side(side_id, side)
            )
        return errors

    @staticmethod
    def validate_catalog(data: Any) -> List[str]:
        """Validate the complete catalog document.

        Args:
            data: Parsed JSON document with 'areas' and 'chapters'

        Returns:
            List of all validation errors (empty if valid)
        """
        if not isinstance(data, dict):
            return ["Catalog root must be an object"]
        document = cast(Dict[str, Any], data)
        areas = document.get("areas")
        chapters = document.get("chapters", {})
        if not isinstance(areas, dict) or not areas:
            return ["Catalog must define at least one area under 'areas'"]
        if not isinstance(chapters, dict):
            return ["Catalog 'chapters' must be an object"]

        errors: List[str] = []
        area_map = cast(Dict[str, Any], areas)
        chapter_map = cast(Dict[str, Any], chapters)

        for area_id, area in area_map.items():
            errors.extend(CatalogSchema.validate_slug(area_id, "Area id"))
            if not isinstance(area, dict):
                errors.append(f"Area '{area_id}' must be an object")
                continue
            missing = CatalogSchema.REQUIRED_AREA_FIELDS - cast(Dict[str, Any], area).keys()
            if missing:
                errors.append(f"Area '{area_id}' missing required fields: {sorted(missing)}")
                continue
            listed = area["chapters"]
            if not isinstance(listed, list):
                errors.append(f"Area '{area_id}' 'chapters' must be an array")
                continue

            area_chapters = chapter_map.get(area_id, {})
            if not isinstance(area_chapters, dict):
                errors.append(f"Chapters of area '{area_id}' must be an object")
                continue
            if not all(isinstance(c, str) for c in cast(List[Any], listed)):
                errors.append(f"Area '{area_id}' 'chapters' must list chapter ids")
                continue
            for chapter_id in cast(List[str], listed):
                if chapter_id not in area_chapters:
                    errors.append(f"Area '{area_id}' references undefined chapter {chapter_id!r}")
            for chapter_id, count in Counter(cast(List[str], listed)).items():
                if count > 1:
                    errors.append(f"Area '{area_id}' lists chapter {chapter_id!r} twice")

        for area_id, area_chapters in chapter_map.items():
            if area_id not in area_map:
                errors.append(f"Chapters defined for undefined area {area_id!r}")
                continue
            if not isinstance(area_chapters, dict):
                continue
            for chapter_id, chapter in cast(Dict[str, Any], area_chapters).items():
                errors.extend(
                    f"Area '{area_id}': {err}"
                    for err in CatalogSchema.validate_chapter(chapter_id, chapter)
                )

        return errors

    @staticmethod
    def collect_warnings(data: Mapping[str, Any], sides: Mapping[str, Side]) -> List[str]:
        """Return non-fatal findings for an already validated document.

        Args:
            data: Validated catalog document
            sides: Built sides keyed by 'area/chapter/side'

        Returns:
            List of warning messages
        """
        warnings: List[str] = []
        areas = cast(Dict[str, Any], data["areas"])
        for area_id, area_chapters in cast(Dict[str, Any], data.get("chapters", {})).items():
            listed = set(cast(List[str], areas[area_id]["chapters"]))
            for chapter_id in area_chapters:
                if chapter_id not in listed:
                    warnings.append(
                        f"Chapter '{area_id}/{chapter_id}' is not listed by its area"
                    )

        for key, side in sides.items():
            listed_rooms = set()
            for checkpoint in side.checkpoints:
                for room_id in checkpoint.room_order:
                    listed_rooms.add(room_id)
                    if room_id not in side.rooms:
                        warnings.append(
                            f"Side '{key}' checkpoint '{checkpoint.name}' lists unknown room '{room_id}'"
                        )
            unlisted = [room_id for room_id in side.rooms if room_id not in listed_rooms]
            if unlisted:
                warnings.append(f"Side '{key}' has rooms outside any checkpoint: {unlisted}")
            computed = side.computed_room_count
            if computed != side.room_count:
                warnings.append(
                    f"Side '{key}' roomCount is {side.room_count}, checkpoints list {computed}"
                )
        return warnings

