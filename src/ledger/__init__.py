"""Ledger — Entry Store контракт и reference-реализация в памяти."""

from .entry_store import EntryStore, InMemoryEntryStore

__all__ = [
    "EntryStore",
    "InMemoryEntryStore",
]
