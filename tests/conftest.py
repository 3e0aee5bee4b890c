"""Shared fixtures for Berry Camp tests."""

import copy
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop, QSettings, QTimer

from berry_camp.address import AddressCodec
from berry_camp.catalog import CatalogStore
from berry_camp.settings import CampPreferences, CampSettings


def room(
    image: str, x: float, y: float, name: Optional[str] = None, subrooms: Optional[List[str]] = None
) -> Dict[str, Any]:
    """Build a room record in catalog JSON form."""
    data: Dict[str, Any] = {"image": image, "defaultSpawn": {"x": x, "y": y}}
    if name:
        data["name"] = name
    if subrooms:
        data["subrooms"] = [
            {"name": sub_name, "image": f"{image}/{index}"}
            for index, sub_name in enumerate(subrooms, start=1)
        ]
    return data


SAMPLE_CATALOG: Dict[str, Any] = {
    "areas": {
        "celeste": {
            "gameId": "Celeste",
            "name": "Celeste",
            "desc": "The base game.",
            "chapters": ["prologue", "city", "site"],
        },
        "farewell": {
            "gameId": "Farewell",
            "name": "Farewell",
            "desc": "The last chapter.",
            "chapters": ["farewell"],
        },
    },
    "chapters": {
        "celeste": {
            "prologue": {
                "gameId": "0",
                "name": "Prologue",
                "desc": "The start of the climb.",
                "image": "celeste/prologue",
                "sides": {
                    "a": {
                        "name": "A",
                        "roomCount": 2,
                        "checkpoints": [{"name": "Start", "roomOrder": ["0", "1"]}],
                        "rooms": {
                            "0": room("prologue/a/0", 16, 136, "Road"),
                            "1": room("prologue/a/1", 8, 160, "Bridge"),
                        },
                    }
                },
            },
            "city": {
                "gameId": "1",
                "name": "Forsaken City",
                "desc": "An abandoned city.",
                "chapterNo": 1,
                "image": "celeste/city",
                "sides": {
                    "a": {
                        "name": "A",
                        "roomCount": 6,
                        "checkpoints": [
                            {"name": "Start", "roomOrder": ["1", "1a", "2"]},
                            {"name": "Crossing Point", "roomOrder": ["3", "4"]},
                        ],
                        "rooms": {
                            "1": room("city/a/1", 24, 120, "Start"),
                            "1a": room("city/a/1a", 104, 120, "Wooden Path"),
                            "2": room("city/a/2", 8, 152, subrooms=["Lower", "Upper"]),
                            "3": room("city/a/3", 16, 168, "Crossing"),
                            "4": room("city/a/4", 40.5, 96, "Chasm"),
                        },
                    },
                    "b": {
                        "name": "B",
                        "roomCount": 4,
                        "checkpoints": [
                            {"name": "Start", "roomOrder": ["a-00", "a-01", "2"]},
                            {"name": "Contraption", "roomOrder": ["b-00"]},
                        ],
                        "rooms": {
                            "a-00": room("city/b/a-00", 24, 128),
                            "a-01": room("city/b/a-01", 32, 128),
                            "2": room("city/b/2", 16, 144, "Shared"),
                            "b-00": room("city/b/b-00", 8, 176),
                        },
                    },
                },
            },
            "site": {
                "gameId": "3",
                "name": "Celestial Resort",
                "desc": "A haunted hotel.",
                "chapterNo": 3,
                "image": "celeste/site",
                "sides": {
                    "a": {
                        "name": "A",
                        "roomCount": 2,
                        "checkpoints": [{"name": "Huge Mess", "roomOrder": ["00", "01"]}],
                        "rooms": {
                            "00": room("site/a/00", 32, 160),
                            "01": room("site/a/01", 48, 160),
                        },
                    }
                },
            },
        },
        "farewell": {
            "farewell": {
                "gameId": "LostLevels",
                "name": "Farewell",
                "desc": "Goodbye.",
                "chapterNo": 9,
                "image": "farewell/farewell",
                "sides": {
                    "a": {
                        "name": "A",
                        "roomCount": 1,
                        "checkpoints": [{"name": "Singular", "roomOrder": ["i-00"]}],
                        "rooms": {"i-00": room("farewell/a/i-00", 64, 184, "Hub")},
                    }
                },
            }
        },
    },
}


@pytest.fixture
def catalog_data() -> Dict[str, Any]:
    """Fresh, mutable copy of the sample catalog document."""
    return copy.deepcopy(SAMPLE_CATALOG)


@pytest.fixture
def store(catalog_data: Dict[str, Any]) -> CatalogStore:
    return CatalogStore.from_dict(catalog_data)


@pytest.fixture
def codec(store: CatalogStore) -> AddressCodec:
    return AddressCodec(store)


@pytest.fixture
def preferences() -> CampPreferences:
    return CampPreferences()


@pytest.fixture
def qsettings_path(tmp_path: Path) -> Path:
    return tmp_path / "berry_camp.ini"


@pytest.fixture
def camp_settings(qsettings_path: Path) -> CampSettings:
    """CampSettings backed by an ini file in a temporary directory."""
    return CampSettings(settings=QSettings(str(qsettings_path), QSettings.Format.IniFormat))


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    """Qt application instance needed for networking and event loops."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


def wait_for_signal(signal: Any, trigger: Callable[[], Any], timeout_ms: int = 5000) -> List[Tuple[Any, ...]]:
    """Run ``trigger`` and spin an event loop until ``signal`` fires or time runs out.

    Returns:
        Argument tuples the signal was emitted with (empty on timeout)
    """
    loop = QEventLoop()
    received: List[Tuple[Any, ...]] = []

    def handler(*args: Any) -> None:
        received.append(args)
        loop.quit()

    timer = QTimer()
    timer.setSingleShot(True)
    timer.timeout.connect(loop.quit)

    signal.connect(handler)
    try:
        trigger()
        timer.start(timeout_ms)
        if not received:
            loop.exec()
    finally:
        timer.stop()
        signal.disconnect(handler)
    return received
