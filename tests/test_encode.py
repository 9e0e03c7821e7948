"""Tests for encoding records into batches."""
import pytest

from fluxseries.errors import InvalidInput
from fluxseries.wire import encode


def test_encode_single_record():
    """A lone record is encoded as a batch of one point."""
    batch = encode.encode_points("seriez", {"name": "juan", "age": 87})

    assert batch.to_payload() == {
        "name": "seriez",
        "points": [["juan", 87]],
        "columns": ["name", "age"],
    }


def test_encode_multiple_records():
    batch = encode.encode_points("seriez", [{"name": "juan", "age": 87}, {"name": "shahid", "age": 99}])

    assert batch.columns == ["name", "age"]
    assert batch.points == [["juan", 87], ["shahid", 99]]


def test_encode_missing_attribute_is_null():
    """A record lacking an attribute gets None at that column, not a shorter row."""
    batch = encode.encode_points("seriez", [{"name": "juan", "age": 87}, {"name": "shahid"}])

    assert batch.columns == ["name", "age"]
    assert batch.points == [["juan", 87], ["shahid", None]]


def test_encode_column_order_is_first_occurrence():
    records = [
        {"b": 1},
        {"a": 2, "b": 3},
        {"c": 4, "a": 5},
    ]
    batch = encode.encode_points("s", records)

    assert batch.columns == ["b", "a", "c"]
    assert batch.points == [[1, None, None], [3, 2, None], [None, 5, 4]]
    assert all(len(row) == len(batch.columns) for row in batch.points)


def test_encode_later_reordering_does_not_change_columns():
    batch = encode.encode_points("s", [{"x": 1, "y": 2}, {"y": 3, "x": 4}])

    assert batch.columns == ["x", "y"]
    assert batch.points == [[1, 2], [4, 3]]


def test_encode_attribute_names_are_case_sensitive():
    batch = encode.encode_points("s", [{"age": 1}, {"Age": 2}])

    assert batch.columns == ["age", "Age"]
    assert batch.points == [[1, None], [None, 2]]


def test_encode_explicit_none_is_kept():
    batch = encode.encode_points("s", [{"a": None, "b": True}])

    assert batch.points == [[None, True]]


def test_encode_does_not_modify_input():
    records = [{"name": "juan"}, {"age": 3}]
    encode.encode_points("s", records)

    assert records == [{"name": "juan"}, {"age": 3}]


def test_encode_empty_records_fails():
    with pytest.raises(InvalidInput, match="No records"):
        encode.encode_points("seriez", [])


def test_encode_empty_series_name_fails():
    with pytest.raises(InvalidInput, match="series_name"):
        encode.encode_points("", {"a": 1})


def test_encode_non_mapping_record_fails():
    with pytest.raises(InvalidInput, match="position 1"):
        encode.encode_points("s", [{"a": 1}, ["a", 1]])


def test_encode_string_records_fails():
    with pytest.raises(InvalidInput):
        encode.encode_points("s", "a=1")


def test_encode_non_string_attribute_fails():
    with pytest.raises(InvalidInput, match="strings"):
        encode.encode_points("s", [{1: "a"}])


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        encode.encode_points("s", [])


def test_encode_series_one_batch_per_name():
    batches = encode.encode_series({
        "cpu": [{"host": "a", "value": 1}],
        "mem": {"host": "b", "used": 10},
    })

    assert [b.name for b in batches] == ["cpu", "mem"]
    assert batches[0].columns == ["host", "value"]
    assert batches[1].points == [["b", 10]]


def test_encode_series_empty_fails():
    with pytest.raises(InvalidInput):
        encode.encode_series({})
