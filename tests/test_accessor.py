from bug_app.features.query.accessor import Unexpected, as_text, resolve, resolve_text, tag_list


class _Exploding:
    """Attribute-style record whose properties blow up when read."""

    @property
    def status(self):
        raise RuntimeError("boom")

    @property
    def assignedTo(self):
        raise KeyError("assignedTo")


class _Bug:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


def test_assignee_fallback_chain_order():
    assert resolve({"assignedTo": {"name": "Alice", "username": "alice"}}, "Assignee") == "Alice"
    assert resolve({"assignedTo": {"username": "alice"}, "assignee": {"name": "Bob"}}, "Assignee") == "alice"
    assert resolve({"assignee": {"name": "Bob"}, "assignedName": "Carol"}, "Assignee") == "Bob"
    assert resolve({"assignee": {"username": "bob"}}, "Assignee") == "bob"
    assert resolve({"assignedName": "Carol", "assignedTo": "dave"}, "Assignee") == "Carol"
    assert resolve({"assignedTo": "dave"}, "Assignee") == "dave"
    assert resolve({"assignee": "erin"}, "Assignee") == "erin"


def test_assignee_empty_values_are_skipped():
    record = {"assignedTo": {"name": ""}, "assignee": {"name": None, "username": "zed"}}
    assert resolve(record, "Assignee") == "zed"


def test_assignee_list_resolves_to_names():
    record = {"assignee": [{"name": "Alice"}, {"username": "bob"}, {"id": 3}]}
    assert resolve(record, "Assignee") == ["Alice", "bob"]
    assert resolve_text(record, "Assignee") == "Alice, bob"


def test_missing_assignee_is_absent():
    assert resolve({"title": "x"}, "Assignee") is None
    assert resolve({"assignee": []}, "Assignee") is None
    # object without a usable name
    assert resolve({"assignedTo": {"id": 7}}, "Assignee") is None


def test_created_by_shapes():
    assert resolve({"createdBy": {"name": "Ann"}}, "Created by") == "Ann"
    assert resolve({"createdBy": {"username": "ann"}}, "Created by") == "ann"
    assert resolve({"createdBy": "ann@example.com"}, "Created by") == "ann@example.com"
    assert resolve({}, "Created by") is None


def test_tags_join_or_pass_through():
    assert resolve({"tags": ["frontend", "auth"]}, "Tags") == "frontend, auth"
    assert resolve({"tags": "frontend, auth"}, "Tags") == "frontend, auth"
    assert resolve({"tags": []}, "Tags") is None
    assert tag_list({"tags": "frontend, auth"}) == ["frontend", "auth"]
    assert tag_list({"tags": ["ui", None]}) == ["ui"]
    assert tag_list({}) == []


def test_simple_fields():
    record = {
        "status": "Open",
        "priority": "HIGH",
        "dueDate": "2024-05-01",
        "closedDate": "2024-06-01",
        "createdAt": "2024-04-01T10:00:00Z",
    }
    assert resolve(record, "Status") == "Open"
    assert resolve(record, "Priority") == "HIGH"
    assert resolve(record, "Due date") == "2024-05-01"
    assert resolve(record, "Date closed") == "2024-06-01"
    assert resolve(record, "Date created") == "2024-04-01T10:00:00Z"


def test_task_type_defaults_to_bug():
    assert resolve({}, "Task type") == "Bug"
    assert resolve({"type": "Feature"}, "Task type") == "Feature"


def test_unknown_field_is_empty_string():
    assert resolve({"status": "open"}, "Start date") == ""
    assert resolve({"status": "open"}, "Nonsense") == ""


def test_attribute_records_are_supported():
    bug = _Bug(status="open", createdBy=_Bug(name="Ann"))
    assert resolve(bug, "Status") == "open"
    assert resolve(bug, "Created by") == "Ann"


def test_raising_record_degrades_to_empty():
    bug = _Exploding()
    assert resolve(bug, "Status") is None
    assert resolve(bug, "Assignee") is None
    assert resolve_text(bug, "Status") == ""


def test_non_mapping_records_never_raise():
    for record in (None, 42, "text", ["a"], {"assignedTo": 5}):
        for field in ("Status", "Assignee", "Tags", "Created by", "Task type"):
            resolve(record, field)
    assert resolve({"assignedTo": 5}, "Assignee") == "5"


def test_as_text():
    assert as_text(None) == ""
    assert as_text("x") == "x"
    assert as_text(["a", "b"]) == "a, b"
    assert as_text(Unexpected({"name": "open"})) == ""


def test_object_where_text_expected_is_unexpected_not_repr():
    status = {"name": "open"}
    assert resolve({"status": status}, "Status") == Unexpected(status)
    assert resolve_text({"status": status}, "Status") == ""
    assert resolve({"priority": 3}, "Priority") == "3"
    assert resolve({"priority": ["high", 2]}, "Priority") == ["high", "2"]
    assert isinstance(resolve({"priority": ["high", {"x": 1}]}, "Priority"), Unexpected)
