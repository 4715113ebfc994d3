import pytest
from sqlalchemy import Text
from forum.core.errors import ValidationError
from forum.models.thread import Thread
from forum.services.validation import extract_fields, ensure_filled, validate_required, validate_present


@pytest.mark.unit
@pytest.mark.parametrize(
    "fields, field",
    [
        ({"title": "test title"}, "body"),
        ({"body": "test body"}, "title"),
        ({}, "title"),
        ({"title": "", "body": ""}, "title"),
        ({"title": "t", "body": None}, "body"),
    ],
)
def test_required_reports_first_failing_field(fields, field):
    with pytest.raises(ValidationError) as exc:
        validate_required(fields)
    assert exc.value.field == field
    assert exc.value.status_code == 400
    assert str(exc.value) == f"required validation failed on {field}"


@pytest.mark.unit
def test_required_accepts_complete_payload():
    validate_required({"title": "t", "body": "b"})


@pytest.mark.unit
def test_present_skips_absent_fields():
    validate_present({})
    validate_present({"body": "only body"})


@pytest.mark.unit
def test_present_rejects_empty_supplied_field():
    with pytest.raises(ValidationError) as exc:
        validate_present({"body": ""})
    assert exc.value.field == "body"


@pytest.mark.unit
def test_error_payload_shape():
    err = ValidationError("title")
    assert err.to_dict() == {
        "detail": "required validation failed on title",
        "field": "title",
        "validation": "required",
    }


@pytest.mark.unit
def test_model_refuses_empty_values():
    with pytest.raises(ValidationError):
        Thread(title="", body="b")
    thread = Thread(title="t", body="b")
    with pytest.raises(ValidationError):
        thread.body = None


@pytest.mark.unit
@pytest.mark.parametrize("fields", [{"title": 123, "body": "b"}, {"title": ["t"], "body": "b"}, {"title": "t", "body": {}}])
def test_required_rejects_non_text(fields):
    with pytest.raises(ValidationError) as exc:
        validate_required(fields)
    assert exc.value.validation == "string"
    assert exc.value.detail == f"string validation failed on {exc.value.field}"


@pytest.mark.unit
def test_presence_is_checked_before_type_of_later_field():
    with pytest.raises(ValidationError) as exc:
        validate_required({"title": "", "body": 5})
    assert (exc.value.field, exc.value.validation) == ("title", "required")


@pytest.mark.unit
def test_ensure_filled_returns_text():
    assert ensure_filled("title", "x" * 300) == "x" * 300


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, {}),
        (b"", {}),
        (b'{"title": "t", "user_id": "x"}', {"title": "t"}),
        ({"body": "b"}, {"body": "b"}),
    ],
)
def test_extract_fields(raw, expected):
    assert extract_fields(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw, validation", [(b"[1, 2]", "object"), (b'"text"', "object"), (b"{oops", "json")])
def test_extract_fields_rejects_non_object(raw, validation):
    with pytest.raises(ValidationError) as exc:
        extract_fields(raw)
    assert (exc.value.field, exc.value.validation) == ("payload", validation)


@pytest.mark.unit
def test_title_column_is_unbounded_text():
    assert isinstance(Thread.__table__.c.title.type, Text)
    assert isinstance(Thread.__table__.c.body.type, Text)
