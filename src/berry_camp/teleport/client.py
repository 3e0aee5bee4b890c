"""
Fire-and-forget teleport requests to a locally running game.

The game exposes a remote control endpoint on localhost when it runs
with remote control enabled. A request either gets dispatched or fails
to reach it; no response body is read. Failures are expected (the game
may simply not be running) and are reported through the ``failed``
signal and an INFO log line, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Set, Union

from PySide6.QtCore import QObject, QUrl, Signal
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkProxy, QNetworkReply, QNetworkRequest

from ..address.codec import encode_teleport_query
from ..catalog.models import Area, Chapter, Room, Side
from ..settings.teleport import DEFAULT_TIMEOUT_MS
from ..settings.types import CampPreferences

logger = logging.getLogger(__name__)

TELEPORT_PATH = "/tp"


@dataclass(frozen=True)
class TeleportTarget:
    """Everything the game needs to place the player in a room.

    Ids are game-native (``gameId``), not catalog slugs.
    """
    area_game_id: str
    chapter_game_id: str
    side_id: str
    room_id: str
    x: Union[int, float]
    y: Union[int, float]

    @classmethod
    def for_room(cls, area: Area, chapter: Chapter, side: Side, room: Room) -> "TeleportTarget":
        """Target a room's default spawn point."""
        return cls(
            area_game_id=area.game_id,
            chapter_game_id=chapter.game_id,
            side_id=side.id,
            room_id=room.id,
            x=room.default_spawn.x,
            y=room.default_spawn.y,
        )

    @property
    def query(self) -> str:
        return encode_teleport_query(
            self.area_game_id, self.chapter_game_id, self.side_id, self.room_id, self.x, self.y
        )


class TeleportClient(QObject):
    """Sends teleport commands to the game's control endpoint.

    Signals:
        dispatched(url): The endpoint accepted the request
        failed(url, message): No listener, timeout or an HTTP error
    """

    dispatched = Signal(str)
    failed = Signal(str, str)

    def __init__(
        self,
        preferences: CampPreferences,
        host: str = "localhost",
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.preferences = preferences
        self.host = host
        self.timeout_ms = timeout_ms
        self._manager = QNetworkAccessManager(self)
        # The endpoint is always local, never route it through a configured proxy
        self._manager.setProxy(QNetworkProxy(QNetworkProxy.ProxyType.NoProxy))
        # Replies stay referenced until finished so Python does not collect them early
        self._pending: Set[QNetworkReply] = set()

    @property
    def port(self) -> int:
        return self.preferences.teleport_port

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def build_url(self, target: TeleportTarget) -> str:
        return f"http://{self.host}:{self.port}{TELEPORT_PATH}?{target.query}"

    def teleport(self, target: TeleportTarget) -> QNetworkReply:
        """Dispatch a teleport request and return immediately.

        The outcome arrives later through ``dispatched`` or ``failed``
        once the Qt event loop processes the reply.
        """
        url = self.build_url(target)
        request = QNetworkRequest(QUrl(url))
        request.setTransferTimeout(self.timeout_ms)

        self.logger.debug(f"Dispatching teleport request: {url}")
        reply = self._manager.get(request)
        self._pending.add(reply)
        reply.finished.connect(lambda: self._on_finished(reply, url))
        return reply

    def _on_finished(self, reply: QNetworkReply, url: str) -> None:
        self._pending.discard(reply)
        error = reply.error()
        if error == QNetworkReply.NetworkError.NoError:
            self.logger.info(f"Teleport request dispatched: {url}")
            self.dispatched.emit(url)
        else:
            message = reply.errorString()
            self.logger.info(
                f"Teleport request to port {self.port} failed: {message} "
                "(is the game running with remote control enabled?)"
            )
            self.failed.emit(url, message)
        reply.deleteLater()
