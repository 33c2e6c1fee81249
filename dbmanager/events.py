"""
Application events and the bus that carries them.

Tabs and popups cannot see the controller. They report what happened by
sending an ``AppEvent`` through an ``EventSender``; the controller drains the
bus once per frame and applies the events in the order they were sent.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

logger = logging.getLogger(__name__)


class DbType(Enum):
    """Database engines offered by the types tab."""

    POSTGRES = "PostgreSQL"
    MYSQL = "MySQL"
    MARIA = "MariaDB"
    SQLITE = "SQLite"

    @property
    def label(self) -> str:
        return self.value


class PopupKind(Enum):
    CONNECTION_FORM = "connection_form"
    QUIT_CONFIRM = "quit_confirm"


@dataclass(frozen=True)
class ConnectionParams:
    """Validated values from the connection form."""

    host: str
    dbname: str
    username: str
    password: str

    def __repr__(self) -> str:
        return (
            f"ConnectionParams(host={self.host!r}, dbname={self.dbname!r}, "
            f"username={self.username!r}, password='***')"
        )


@dataclass(frozen=True)
class SelectionMade:
    db_type: DbType


@dataclass(frozen=True)
class OpenPopup:
    kind: PopupKind


@dataclass(frozen=True)
class FormSubmitted:
    params: ConnectionParams


@dataclass(frozen=True)
class ClosePopup:
    pass


@dataclass(frozen=True)
class ConfirmQuit:
    pass


AppEvent = Union[SelectionMade, OpenPopup, FormSubmitted, ClosePopup, ConfirmQuit]


class EventSender:
    """Send-only handle given to tabs and popups."""

    def __init__(self, channel: queue.SimpleQueue) -> None:
        self._channel = channel

    def send(self, event: AppEvent) -> None:
        logger.debug("event queued: %r", event)
        self._channel.put_nowait(event)


class EventBus:
    """FIFO channel of ``AppEvent`` values. Never blocks."""

    def __init__(self) -> None:
        self._channel: queue.SimpleQueue = queue.SimpleQueue()
        self._sender = EventSender(self._channel)

    @property
    def sender(self) -> EventSender:
        return self._sender

    def send(self, event: AppEvent) -> None:
        self._sender.send(event)

    def try_recv(self) -> AppEvent | None:
        """Return the oldest queued event, or None if the bus is empty."""
        try:
            return self._channel.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> Iterator[AppEvent]:
        """Yield queued events in arrival order until the bus is empty.

        Events sent while draining are yielded in the same pass.
        """
        while True:
            event = self.try_recv()
            if event is None:
                return
            yield event

    def __len__(self) -> int:
        return self._channel.qsize()
