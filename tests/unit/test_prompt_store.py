import sqlite3

import pytest

from promptsmith.domains import Domain
from promptsmith.storage.store import InMemoryPromptStore, SQLitePromptStore, rank_records
from promptsmith.types import PromptRecord


def _record(record_id: str, name: str, domain: Domain = Domain.GENERAL, score: float = 0.5, **kwargs) -> PromptRecord:
    return PromptRecord(
        id=record_id,
        name=name,
        domain=domain,
        raw=kwargs.get("raw", name.lower()),
        refined=kwargs.get("refined", name),
        system="system prompt",
        tags=tuple(kwargs.get("tags", ())),
        description=kwargs.get("description", ""),
        overall_score=score,
        created_at=kwargs.get("created_at", "2026-01-01T00:00:00+00:00"),
    )


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryPromptStore()
    return SQLitePromptStore(tmp_path / "prompts.db")


def test_create_and_get(store) -> None:
    record = _record("r1", "Orders schema", Domain.SQL, tags=("sql", "orders"))

    assert store.create(record) == "r1"
    assert store.get("r1") == record
    assert store.get("missing") is None


def test_search_ranks_by_overlap_then_score(store) -> None:
    store.create(_record("r1", "Orders table schema", Domain.SQL, score=0.4))
    store.create(_record("r2", "Orders report", Domain.GENERAL, score=0.9))
    store.create(_record("r3", "Orders table design", Domain.SQL, score=0.8))
    store.create(_record("r4", "Brand campaign", Domain.BRANDING, score=0.99))

    assert [record.id for record in store.search("orders table")] == ["r3", "r1", "r2"]
    assert [record.id for record in store.search("orders", domain=Domain.SQL)] == ["r3", "r1"]
    assert [record.id for record in store.search("orders", limit=1)] == ["r2"]


def test_empty_query_lists_all_records(store) -> None:
    store.create(_record("r1", "First", score=0.2))
    store.create(_record("r2", "Second", score=0.7))

    assert [record.id for record in store.search("")] == ["r2", "r1"]


def test_counts_by_domain(store) -> None:
    store.create(_record("r1", "One", Domain.SQL))
    store.create(_record("r2", "Two", Domain.SQL))
    store.create(_record("r3", "Three", Domain.LEGAL))

    assert store.counts_by_domain() == {"legal": 1, "sql": 2}


def test_duplicate_ids_are_rejected_in_memory() -> None:
    store = InMemoryPromptStore()
    store.create(_record("r1", "One"))

    with pytest.raises(ValueError):
        store.create(_record("r1", "One again"))


def test_duplicate_ids_are_rejected_in_sqlite(tmp_path) -> None:
    store = SQLitePromptStore(tmp_path / "prompts.db")
    store.create(_record("r1", "One"))

    with pytest.raises(sqlite3.IntegrityError):
        store.create(_record("r1", "One again"))


def test_sqlite_store_persists_across_instances(tmp_path) -> None:
    path = tmp_path / "prompts.db"
    SQLitePromptStore(path).create(_record("r1", "Persisted", tags=("keep",)))

    restored = SQLitePromptStore(path).get("r1")

    assert restored is not None
    assert restored.tags == ("keep",)


def test_rank_records_matches_tags_and_description() -> None:
    records = [
        _record("r1", "Alpha", tags=("billing",)),
        _record("r2", "Beta", description="Covers billing disputes"),
        _record("r3", "Gamma"),
    ]

    assert [record.id for record in rank_records(records, "billing", 10)] == ["r1", "r2"]
