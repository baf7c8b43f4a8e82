from bug_app.core.models import FilterClause
from bug_app.features.query.predicates import inert_combinators, matches, matches_all


def _clause(field, value, combinator="AND", clause_id=1):
    return FilterClause(id=clause_id, field=field, value=value, combinator=combinator)


def test_status_is_case_insensitive_exact_match():
    assert matches({"status": "open"}, _clause("Status", "Open"))
    assert not matches({"status": "reopened"}, _clause("Status", "open"))


def test_priority_is_exact_match():
    assert matches({"priority": "HIGH"}, _clause("Priority", "high"))
    assert not matches({"priority": "highest"}, _clause("Priority", "high"))


def test_status_and_priority_fail_when_absent():
    assert not matches({}, _clause("Status", "open"))
    assert not matches({"status": ""}, _clause("Status", "open"))
    assert not matches({"status": "open"}, _clause("Priority", "low"))


def test_optional_fields_pass_when_absent():
    record = {"status": "open"}
    for field in ("Tags", "Assignee", "Created by", "Due date", "Date closed", "Date created", "Start date"):
        assert matches(record, _clause(field, "anything")), field


def test_tags_substring_in_any_tag():
    record = {"tags": ["Frontend", "auth-service"]}
    assert matches(record, _clause("Tags", "AUTH"))
    assert matches(record, _clause("Tags", "front"))
    assert not matches(record, _clause("Tags", "backend"))


def test_tags_delimited_string():
    assert matches({"tags": "ui, api"}, _clause("Tags", "api"))
    assert not matches({"tags": "ui, api"}, _clause("Tags", "db"))


def test_assignee_and_creator_substring():
    record = {"assignedTo": {"name": "Alice Smith"}, "createdBy": {"username": "bob_the_builder"}}
    assert matches(record, _clause("Assignee", "smith"))
    assert not matches(record, _clause("Assignee", "jones"))
    assert matches(record, _clause("Created by", "BUILDER"))


def test_assignee_list_matches_any_name():
    record = {"assignee": [{"name": "Alice"}, {"name": "Bob"}]}
    assert matches(record, _clause("Assignee", "bob"))
    assert not matches(record, _clause("Assignee", "carol"))


def test_date_fields_use_substring():
    record = {"dueDate": "2024-05-01T00:00:00Z"}
    assert matches(record, _clause("Due date", "2024-05-01"))
    assert not matches(record, _clause("Due date", "2024-06"))


def test_evaluation_error_fails_open():
    class Unprintable:
        def __str__(self):
            raise RuntimeError("no text")

    clause = FilterClause(id=1, field="Status", value=Unprintable())
    assert matches({"status": "closed"}, clause)


def test_unexpected_value_type_is_compared_as_text():
    class Weird:
        status = 404

    assert matches(Weird(), _clause("Status", "404"))


def test_object_shaped_value_fails_open():
    assert matches({"status": {"name": "open"}}, _clause("Status", "open"))
    assert matches({"status": {"name": "open"}}, _clause("Status", "closed"))
    assert matches({"priority": [{"level": 1}]}, _clause("Priority", "high"))
    assert matches({"tags": {"frontend": True}}, _clause("Tags", "backend"))


def test_or_combinator_is_inert():
    clauses = [
        _clause("Status", "Open", clause_id=1),
        _clause("Priority", "High", combinator="OR", clause_id=2),
    ]
    assert not matches_all({"status": "Open", "priority": "Low"}, clauses)
    assert matches_all({"status": "Open", "priority": "High"}, clauses)
    assert inert_combinators(clauses) == [clauses[1]]


def test_inactive_clauses_are_ignored():
    clauses = [_clause("", ""), _clause("Status", "", clause_id=2), _clause("", "x", clause_id=3)]
    assert matches_all({}, clauses)


def test_first_clause_combinator_not_reported():
    clauses = [_clause("Status", "open", combinator="OR")]
    assert inert_combinators(clauses) == []
