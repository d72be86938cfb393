"""
Тесты для InMemoryEntryStore

Проверяемые инварианты:
1. Записи принимаются только в OPEN сессию
2. close() — ровно один раз за поколение
3. reopen() увеличивает generation, существующие записи не мутируются
4. Снапшот не видит частично добавленных записей (конкурентный append)
"""

import threading

import pytest

from src.core.domain import Entry, SessionStatus
from src.core.errors import SessionClosed, UnknownSession
from src.ledger import EntryStore, InMemoryEntryStore


@pytest.fixture
def store():
    store = InMemoryEntryStore()
    store.open_session("game-1")
    return store


class TestLifecycle:
    """Тесты жизненного цикла сессии."""

    def test_open_append_close(self, store):
        entry = Entry(participant="A", buy_in=100, cash_out=0)
        store.append("game-1", entry)

        snapshot = store.close("game-1")

        assert snapshot.status == SessionStatus.CLOSED
        assert snapshot.generation == 1
        assert snapshot.entries == (entry,)
        assert store.snapshot("game-1") == snapshot

    def test_snapshot_of_open_session(self, store):
        snapshot = store.snapshot("game-1")
        assert snapshot.status == SessionStatus.OPEN
        assert snapshot.entries == ()

    def test_snapshot_is_immutable_copy(self, store):
        store.append("game-1", Entry(participant="A", buy_in=1, cash_out=0))
        snapshot = store.snapshot("game-1")
        store.append("game-1", Entry(participant="B", buy_in=1, cash_out=0))

        assert len(snapshot.entries) == 1

    def test_close_twice_rejected(self, store):
        store.close("game-1")
        with pytest.raises(SessionClosed, match="close twice"):
            store.close("game-1")

    def test_append_after_close_rejected(self, store):
        store.close("game-1")
        with pytest.raises(SessionClosed, match="append entries") as exc_info:
            store.append("game-1", Entry(participant="A", buy_in=1, cash_out=0))
        assert exc_info.value.code == "session_closed"

    def test_reopen_increments_generation(self, store):
        first = Entry(participant="A", buy_in=100, cash_out=0)
        store.append("game-1", first)
        store.close("game-1")

        assert store.reopen("game-1") == 2

        correction = Entry(participant="B", buy_in=0, cash_out=100)
        store.append("game-1", correction)
        snapshot = store.close("game-1")

        assert snapshot.generation == 2
        assert snapshot.entries == (first, correction)

    def test_reopen_open_session_rejected(self, store):
        with pytest.raises(ValueError, match="not closed"):
            store.reopen("game-1")

    def test_duplicate_open_rejected(self, store):
        with pytest.raises(ValueError, match="already exists"):
            store.open_session("game-1")

    def test_unknown_session(self, store):
        with pytest.raises(UnknownSession):
            store.snapshot("nope")
        with pytest.raises(UnknownSession):
            store.append("nope", Entry(participant="A", buy_in=1, cash_out=0))

    def test_append_requires_entry(self, store):
        with pytest.raises(TypeError):
            store.append("game-1", {"participant": "A", "buy_in": 1, "cash_out": 0})

    def test_satisfies_protocol(self, store):
        def read(source: EntryStore, session_id: str):
            return source.snapshot(session_id)

        assert read(store, "game-1").session_id == "game-1"


class TestConcurrency:
    """Конкурентные append из нескольких потоков."""

    def test_concurrent_appends(self, store):
        per_thread = 200

        def writer(name: str) -> None:
            for _ in range(per_thread):
                store.append("game-1", Entry(participant=name, buy_in=1, cash_out=0))

        threads = [threading.Thread(target=writer, args=(f"p{i}",)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = store.close("game-1")
        assert len(snapshot.entries) == 4 * per_thread
