"""Entry Store — хранилище записей сессий (reference-реализация в памяти).

Дисциплина single-writer-then-freeze:
- OPEN: записи принимаются (append)
- close() переводит сессию в CLOSED ровно один раз за поколение
- после close новые записи отвергаются (SessionClosed)
- reopen() возвращает сессию в OPEN и увеличивает generation;
  исправление — новая запись, существующие записи не мутируются
- snapshot() — полный immutable снимок (все записи, поставленные до close)

Все операции выполняются под одним threading.Lock, поэтому снапшот
никогда не видит частично добавленную запись.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Protocol

from src.core.domain.entry import Entry
from src.core.domain.session import SessionSnapshot, SessionStatus
from src.core.errors import SessionClosed, UnknownSession

logger = logging.getLogger(__name__)


class EntryStore(Protocol):
    """Минимальный контракт, который ядро требует от Entry Store."""

    def snapshot(self, session_id: str) -> SessionSnapshot:
        ...


@dataclass
class _SessionRecord:
    status: SessionStatus = SessionStatus.OPEN
    generation: int = 1
    entries: list[Entry] = field(default_factory=list)


class InMemoryEntryStore:
    """Потокобезопасный Entry Store в памяти."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, _SessionRecord] = {}

    def _get(self, session_id: str) -> _SessionRecord:
        record = self._sessions.get(session_id)
        if record is None:
            raise UnknownSession(session_id)
        return record

    def open_session(self, session_id: str) -> None:
        """Создание новой сессии в состоянии OPEN."""
        with self._lock:
            if session_id in self._sessions:
                raise ValueError(f"Session {session_id!r} already exists")
            self._sessions[session_id] = _SessionRecord()
        logger.debug("Opened session %s", session_id)

    def append(self, session_id: str, entry: Entry) -> None:
        """
        Добавление записи в открытую сессию.

        Raises:
            UnknownSession: сессия не создана
            SessionClosed: сессия уже закрыта
        """
        if not isinstance(entry, Entry):
            raise TypeError(f"entry must be an Entry, got {type(entry).__name__}")
        with self._lock:
            record = self._get(session_id)
            if record.status == SessionStatus.CLOSED:
                raise SessionClosed(session_id, "append entries")
            record.entries.append(entry)

    def close(self, session_id: str) -> SessionSnapshot:
        """
        Закрытие сессии (ровно один раз за поколение).

        Returns:
            Снапшот закрытой сессии

        Raises:
            SessionClosed: сессия уже закрыта
        """
        with self._lock:
            record = self._get(session_id)
            if record.status == SessionStatus.CLOSED:
                raise SessionClosed(session_id, "close twice")
            record.status = SessionStatus.CLOSED
            snapshot = self._snapshot(session_id, record)
        logger.info(
            "Closed session %s (generation %d, %d entries)",
            session_id,
            snapshot.generation,
            len(snapshot.entries),
        )
        return snapshot

    def reopen(self, session_id: str) -> int:
        """
        Повторное открытие закрытой сессии для исправлений.

        Returns:
            Новое поколение сессии
        """
        with self._lock:
            record = self._get(session_id)
            if record.status != SessionStatus.CLOSED:
                raise ValueError(f"Session {session_id!r} is not closed")
            record.status = SessionStatus.OPEN
            record.generation += 1
            generation = record.generation
        logger.info("Reopened session %s as generation %d", session_id, generation)
        return generation

    def snapshot(self, session_id: str) -> SessionSnapshot:
        with self._lock:
            return self._snapshot(session_id, self._get(session_id))

    @staticmethod
    def _snapshot(session_id: str, record: _SessionRecord) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=session_id,
            status=record.status,
            generation=record.generation,
            entries=tuple(record.entries),
        )
