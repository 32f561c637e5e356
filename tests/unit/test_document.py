"""Unit tests for the document model helpers."""

import math

import pytest

from folio.contexts.templating.document import (
    MISSING,
    copy_document,
    documents_equal,
    is_document,
    is_truthy,
    iter_strings,
    lookup_path,
    map_strings,
    to_display_string,
)
from folio.contexts.templating.exceptions import DocumentTypeError


@pytest.mark.unit
def test_copy_document_shares_no_containers():
    """Copies are independent of the original at every level."""
    original = {"sections": {"hero": {"items": [1, 2]}}}
    copied = copy_document(original)

    copied["sections"]["hero"]["items"].append(3)

    assert original == {"sections": {"hero": {"items": [1, 2]}}}
    assert copied is not original


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, True, 3, 2.5, "text", [], {}, {"a": [None, {"b": False}]}])
def test_is_document_accepts_json_values(value):
    assert is_document(value)


@pytest.mark.unit
def test_copy_document_rejects_sets_with_path():
    """Invalid values report where they were found."""
    with pytest.raises(DocumentTypeError) as exc_info:
        copy_document({"sections": {"tags": {"a", "b"}}})

    assert exc_info.value.path == "sections.tags"
    assert exc_info.value.value_type == "set"
    assert isinstance(exc_info.value, TypeError)


@pytest.mark.unit
def test_copy_document_rejects_non_string_keys():
    with pytest.raises(DocumentTypeError):
        copy_document({1: "one"})


@pytest.mark.unit
def test_documents_equal_ignores_key_order():
    assert documents_equal({"a": 1, "b": [1, {"c": 2}]}, {"b": [1, {"c": 2}], "a": 1})


@pytest.mark.unit
def test_documents_equal_distinguishes_bool_from_number():
    assert not documents_equal(True, 1)
    assert not documents_equal(0, False)
    assert documents_equal(1, 1.0)


@pytest.mark.unit
def test_documents_equal_distinguishes_types():
    assert not documents_equal("1", 1)
    assert not documents_equal([], {})
    assert not documents_equal(None, "")
    assert not documents_equal([1, 2], [2, 1])


@pytest.mark.unit
def test_documents_equal_nan_equals_itself():
    document = {"rating": math.nan, "scores": [1.5, math.nan]}

    assert documents_equal(document, copy_document(document))
    assert not documents_equal(math.nan, 1.0)
    assert not documents_equal(1.0, math.nan)


@pytest.mark.unit
def test_map_strings_and_iter_strings():
    document = {"title": "a", "items": ["b", 3, {"c": "d"}]}

    assert list(iter_strings(document)) == ["a", "b", "d"]
    assert map_strings(document, str.upper) == {"title": "A", "items": ["B", 3, {"c": "D"}]}


@pytest.mark.unit
def test_lookup_path_nested_and_indexed():
    variables = {"user": {"name": "Ada"}, "items": [{"title": "first"}]}

    assert lookup_path(variables, "user.name") == "Ada"
    assert lookup_path(variables, "items.0.title") == "first"
    assert lookup_path(variables, "items.5.title") is MISSING
    assert lookup_path(variables, "user.email") is MISSING


@pytest.mark.unit
def test_lookup_path_indexes_tuples():
    variables = {"items": ({"title": "first"}, {"title": "second"})}

    assert lookup_path(variables, "items.1.title") == "second"
    assert lookup_path(variables, "items.2") is MISSING


@pytest.mark.unit
def test_lookup_path_returns_none_values():
    """A stored None resolves; only absent paths are MISSING."""
    assert lookup_path({"a": None}, "a") is None
    assert lookup_path({"a": None}, "a.b") is MISSING


@pytest.mark.unit
def test_lookup_path_stops_at_falsy_intermediate():
    assert lookup_path({"count": 0}, "count.value") is MISSING
    assert lookup_path({"name": ""}, "name.length") is MISSING


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", math.nan, MISSING])
def test_is_truthy_false_values(value):
    assert not is_truthy(value)


@pytest.mark.unit
@pytest.mark.parametrize("value", [True, 1, -1, "0", "false", [], {}, [0]])
def test_is_truthy_true_values(value):
    assert is_truthy(value)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("x", "x"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
        (42, "42"),
        (3.0, "3"),
        (2.5, "2.5"),
        (["a", None, 1], "a,,1"),
        (("a", "b"), "a,b"),
        ({"b": 1, "a": 2}, '{"a":2,"b":1}'),
    ],
)
def test_to_display_string(value, expected):
    assert to_display_string(value) == expected
