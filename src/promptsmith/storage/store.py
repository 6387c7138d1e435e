"""Saved-prompt store contract with in-memory and SQLite implementations."""

from __future__ import annotations

import json
import re
import sqlite3
import threading
from collections import Counter
from pathlib import Path
from typing import Iterable, Protocol

from promptsmith.domains import Domain
from promptsmith.types import PromptRecord

_TERM_PATTERN = re.compile(r"\w+", flags=re.UNICODE)


class PromptStore(Protocol):
    def create(self, record: PromptRecord) -> str:
        """Persist `record` and return its id."""

    def get(self, record_id: str) -> PromptRecord | None:
        ...

    def search(self, query: str, domain: Domain | None = None, limit: int = 10) -> list[PromptRecord]:
        ...

    def counts_by_domain(self) -> dict[str, int]:
        ...


class InMemoryPromptStore:
    def __init__(self) -> None:
        self._records: dict[str, PromptRecord] = {}
        self._lock = threading.Lock()

    def create(self, record: PromptRecord) -> str:
        with self._lock:
            if record.id in self._records:
                raise ValueError(f"Record already exists: {record.id}")
            self._records[record.id] = record
        return record.id

    def get(self, record_id: str) -> PromptRecord | None:
        with self._lock:
            return self._records.get(record_id)

    def search(self, query: str, domain: Domain | None = None, limit: int = 10) -> list[PromptRecord]:
        with self._lock:
            records = list(self._records.values())
        if domain is not None:
            records = [record for record in records if record.domain is domain]
        return rank_records(records, query, limit)

    def counts_by_domain(self) -> dict[str, int]:
        with self._lock:
            counts = Counter(record.domain.value for record in self._records.values())
        return dict(sorted(counts.items()))


class SQLitePromptStore:
    """File-backed store; each call opens its own connection."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        _ensure_prompts_table(self.db_path)

    def create(self, record: PromptRecord) -> str:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT INTO prompts(id, name, domain, raw, refined, system, tags, description, overall_score, created_at) "
                "VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.id,
                    record.name,
                    record.domain.value,
                    record.raw,
                    record.refined,
                    record.system,
                    json.dumps(list(record.tags)),
                    record.description,
                    record.overall_score,
                    record.created_at,
                ),
            )
            conn.commit()
        return record.id

    def get(self, record_id: str) -> PromptRecord | None:
        with sqlite3.connect(self.db_path) as conn:
            cur = conn.execute(f"SELECT {_COLUMNS} FROM prompts WHERE id = ?", (record_id,))
            row = cur.fetchone()
        return _row_to_record(row) if row else None

    def search(self, query: str, domain: Domain | None = None, limit: int = 10) -> list[PromptRecord]:
        with sqlite3.connect(self.db_path) as conn:
            if domain is None:
                cur = conn.execute(f"SELECT {_COLUMNS} FROM prompts")
            else:
                cur = conn.execute(f"SELECT {_COLUMNS} FROM prompts WHERE domain = ?", (domain.value,))
            rows = cur.fetchall()
        return rank_records((_row_to_record(row) for row in rows), query, limit)

    def counts_by_domain(self) -> dict[str, int]:
        with sqlite3.connect(self.db_path) as conn:
            cur = conn.execute("SELECT domain, COUNT(*) FROM prompts GROUP BY domain ORDER BY domain")
            return {domain: int(count) for domain, count in cur.fetchall()}


def rank_records(records: Iterable[PromptRecord], query: str, limit: int) -> list[PromptRecord]:
    """Order by query-term overlap, then score; an empty query matches everything."""
    terms = {term.lower() for term in _TERM_PATTERN.findall(query)}
    scored: list[tuple[int, float, str, str, PromptRecord]] = []
    for record in records:
        haystack = " ".join((record.name, record.raw, record.refined, record.description, *record.tags))
        words = {word.lower() for word in _TERM_PATTERN.findall(haystack)}
        overlap = len(terms & words)
        if terms and overlap == 0:
            continue
        scored.append((-overlap, -record.overall_score, record.created_at, record.id, record))
    scored.sort(key=lambda item: item[:4])
    return [item[-1] for item in scored[: max(0, limit)]]


_COLUMNS = "id, name, domain, raw, refined, system, tags, description, overall_score, created_at"


def _row_to_record(row: tuple) -> PromptRecord:
    record_id, name, domain, raw, refined, system, tags, description, overall_score, created_at = row
    return PromptRecord(
        id=record_id,
        name=name,
        domain=Domain(domain),
        raw=raw,
        refined=refined,
        system=system,
        tags=tuple(json.loads(tags)),
        description=description,
        overall_score=float(overall_score),
        created_at=created_at,
    )


def _ensure_prompts_table(db_path: Path) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS prompts ("
            "id TEXT PRIMARY KEY, name TEXT NOT NULL, domain TEXT NOT NULL, raw TEXT NOT NULL, "
            "refined TEXT NOT NULL, system TEXT NOT NULL, tags TEXT NOT NULL, description TEXT NOT NULL, "
            "overall_score REAL NOT NULL, created_at TEXT NOT NULL)"
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_prompts_domain ON prompts(domain)")
        conn.commit()
