import threading

import pytest

from bug_app.core.errors import QueryStateError
from bug_app.core.models import FilterClause, QuerySnapshot
from bug_app.features.query.state import SEED_CLAUSE_ID, QueryStore


def test_defaults():
    store = QueryStore()
    assert store.search_text == ""
    assert store.sort_field == "Assignee"
    assert store.sort_direction == "Descending"
    assert len(store.clauses) == 1
    assert store.clauses[0] == FilterClause(id=SEED_CLAUSE_ID)
    assert not store.has_active_filters


def test_add_clause_generates_unique_ids():
    store = QueryStore()
    first = store.add_clause()
    second = store.add_clause()
    ids = [c.id for c in store.clauses]
    assert len(set(ids)) == 3
    assert first.id != second.id
    assert second.field == "" and second.value == "" and second.combinator == "AND"


def test_update_clause_merges_and_flags_active():
    store = QueryStore()
    clause_id = store.clauses[0].id
    store.update_clause(clause_id, {"field": "Status"})
    assert store.clauses[0].field == "Status"
    assert not store.has_active_filters
    store.update_clause(clause_id, value="open")
    assert store.clauses[0].value == "open"
    assert store.clauses[0].combinator == "AND"
    assert store.has_active_filters


def test_update_clause_rejects_bad_input():
    store = QueryStore()
    clause_id = store.clauses[0].id
    with pytest.raises(QueryStateError):
        store.update_clause(clause_id, combinator="XOR")
    with pytest.raises(QueryStateError):
        store.update_clause(clause_id, id=99)
    with pytest.raises(QueryStateError):
        store.update_clause(12345, field="Status")


def test_update_clause_rejects_unknown_field():
    store = QueryStore()
    clause_id = store.clauses[0].id
    with pytest.raises(QueryStateError):
        store.update_clause(clause_id, field="Bogus")
    with pytest.raises(QueryStateError):
        store.update_clauses([FilterClause(id=5, field="Bogus", value="x")])
    assert store.clauses[0].field == ""
    # Sort-only fields and clearing the field are allowed
    assert store.update_clause(clause_id, field="Task type").field == "Task type"
    assert store.update_clause(clause_id, field=None).field == ""


def test_remove_clause_never_goes_below_one():
    store = QueryStore()
    added = store.add_clause()
    store.remove_clause(added.id)
    assert len(store.clauses) == 1
    for _ in range(5):
        store.remove_clause(store.clauses[0].id)
        assert len(store.clauses) == 1
    assert store.clauses[0].field == ""


def test_reset_clauses_keeps_search_and_sort():
    store = QueryStore()
    store.set_search_text("  login ")
    store.set_sort_field("Priority")
    store.set_sort_direction("Ascending")
    clause = store.add_clause()
    store.update_clause(clause.id, field="Status", value="open")
    store.reset_clauses()
    assert store.clauses == (FilterClause(id=SEED_CLAUSE_ID),)
    assert store.search_text == "  login "
    assert store.sort_field == "Priority"
    assert store.sort_direction == "Ascending"


def test_reset_all_restores_defaults():
    store = QueryStore()
    store.set_search_text("x")
    store.set_sort_field("Status")
    store.set_sort_direction("Ascending")
    store.add_clause()
    store.reset_all()
    assert store.snapshot == QuerySnapshot(clauses=(FilterClause(id=SEED_CLAUSE_ID),))


def test_sort_direction_validated():
    store = QueryStore()
    with pytest.raises(QueryStateError):
        store.set_sort_direction("Sideways")


def test_update_clauses_replaces_list():
    store = QueryStore()
    store.update_clauses([FilterClause(id=10, field="Tags", value="ui")])
    assert store.has_active_filters
    assert store.add_clause().id > 10
    store.update_clauses([])
    assert len(store.clauses) == 1


def test_snapshots_are_immutable():
    store = QueryStore()
    before = store.snapshot
    store.set_search_text("abc")
    assert before.search_text == ""
    assert store.snapshot.search_text == "abc"


def test_subscribers_receive_committed_snapshots():
    store = QueryStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.set_search_text("a")
    store.add_clause()
    unsubscribe()
    store.set_search_text("b")
    assert [s.search_text for s in seen] == ["a", "a"]
    assert len(seen[-1].clauses) == 2


def test_failing_subscriber_does_not_block_update():
    store = QueryStore()

    def broken(_snapshot):
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.set_search_text("still works")
    assert store.search_text == "still works"


def test_concurrent_adds_keep_every_clause():
    store = QueryStore()

    def worker():
        for _ in range(50):
            store.add_clause()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    ids = [c.id for c in store.clauses]
    assert len(ids) == 201
    assert len(set(ids)) == 201
