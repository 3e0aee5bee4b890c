"""
File loaders for catalog data.

Reads either a single catalog document or a directory tree with one
folder per area. Directory trees are read in parallel using
ThreadPoolExecutor and orjson, then assembled into the single-document
form so validation only has one shape to deal with.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, Tuple

import orjson

from .schema import CatalogLoadError

AREA_FILE = "area.json"
CHAPTERS_DIR = "chapters"


class CatalogLoader:
    """Loads the raw catalog document from disk."""

    def __init__(self, max_workers: int = 16):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.max_workers = max_workers

    @staticmethod
    def read_json_file(json_file: Path) -> Any:
        """Read and parse one JSON file.

        Args:
            json_file: Path to the JSON file to read

        Returns:
            Parsed JSON value

        Raises:
            CatalogLoadError: If the file cannot be read or parsed
        """
        try:
            with json_file.open("rb") as f:  # orjson works with bytes
                return orjson.loads(f.read())
        except OSError as e:
            raise CatalogLoadError(f"Cannot read catalog file {json_file}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise CatalogLoadError(f"Failed to parse JSON from {json_file}: {e}") from e

    def load(self, path: Path) -> Dict[str, Any]:
        """Load a catalog document from a file or directory.

        Args:
            path: Catalog JSON file, or a directory of area folders

        Returns:
            Document with 'areas' and 'chapters' keys

        Raises:
            CatalogLoadError: If the path is missing or any file is unreadable
        """
        path = Path(path)
        if not path.exists():
            raise CatalogLoadError(f"Catalog not found: {path}")

        if path.is_dir():
            return self.load_directory(path)

        self.logger.info(f"Loading catalog from: {path}")
        data = self.read_json_file(path)
        if not isinstance(data, dict):
            raise CatalogLoadError(f"Catalog root in {path} must be an object")
        return data

    def load_directory(self, root: Path) -> Dict[str, Any]:
        """Assemble a catalog document from ``<area>/area.json`` and
        ``<area>/chapters/<chapter>.json`` files."""
        area_dirs = sorted(d for d in root.iterdir() if (d / AREA_FILE).is_file())
        if not area_dirs:
            raise CatalogLoadError(f"No area folders found in {root}")

        self.logger.info(f"Found {len(area_dirs)} area folders in {root}")

        jobs: Dict[Path, Tuple[str, str | None]] = {}
        for area_dir in area_dirs:
            jobs[area_dir / AREA_FILE] = (area_dir.name, None)
            chapters_dir = area_dir / CHAPTERS_DIR
            if chapters_dir.is_dir():
                for chapter_file in sorted(chapters_dir.glob("*.json")):
                    jobs[chapter_file] = (area_dir.name, chapter_file.stem)

        results: Dict[Path, Any] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_file = {
                executor.submit(self.read_json_file, json_file): json_file
                for json_file in jobs
            }
            for future in as_completed(future_to_file):
                # Any unreadable file aborts the load; the catalog must be complete
                results[future_to_file[future]] = future.result()

        areas: Dict[str, Any] = {}
        chapters: Dict[str, Dict[str, Any]] = {}
        # Iterate in job order so area and chapter order do not depend on thread timing
        for json_file, (area_id, chapter_id) in jobs.items():
            if chapter_id is None:
                areas[area_id] = results[json_file]
            else:
                chapters.setdefault(area_id, {})[chapter_id] = results[json_file]

        self.logger.debug(
            f"Assembled {len(areas)} areas and "
            f"{sum(len(c) for c in chapters.values())} chapters from {root}"
        )
        return {"areas": areas, "chapters": chapters}
