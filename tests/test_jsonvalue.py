import pytest

from ssrkit.jsonvalue import JSON_VALUE_NONE, JsonType, JsonValue


def _int(n):
    return JsonValue(JsonType.INTEGER, n)


def _str(s):
    return JsonValue(JsonType.STRING, s)


@pytest.fixture
def document():
    items = JsonValue(JsonType.ARRAY, [_int(1), _str("two"), JsonValue(JsonType.NULL)])
    return JsonValue(
        JsonType.OBJECT,
        [
            ("server", _str("example.com")),
            ("port", _int(8388)),
            ("ratio", JsonValue(JsonType.DOUBLE, 2.75)),
            ("fast", JsonValue(JsonType.BOOLEAN, True)),
            ("items", items),
        ],
    )


def test_object_member_lookup(document):
    assert str(document["server"]) == "example.com"
    assert int(document["port"]) == 8388


def test_missing_member_gives_none_value(document):
    missing = document["absent"]
    assert missing.type is JsonType.NONE
    assert missing == JSON_VALUE_NONE


def test_array_indexing(document):
    items = document["items"]
    assert int(items[0]) == 1
    assert str(items[1]) == "two"
    assert items[3].type is JsonType.NONE
    assert items[-1].type is JsonType.NONE


def test_wrong_kind_of_key_gives_none(document):
    assert document[0].type is JsonType.NONE
    assert document["items"]["x"].type is JsonType.NONE
    assert _int(3)[0].type is JsonType.NONE


def test_len(document):
    assert len(document) == 5
    assert len(document["items"]) == 3
    assert len(document["server"]) == len("example.com")
    assert len(document["port"]) == 0


def test_str_of_non_string_is_empty(document):
    assert str(document["port"]) == ""
    assert str(document) == ""


def test_int_conversions(document):
    assert int(document["ratio"]) == int(2.75)
    assert int(document["server"]) == 0


def test_float_conversions(document):
    assert float(document["ratio"]) == 2.75
    assert float(document["port"]) == 8388.0
    assert float(document["server"]) == 0.0


def test_bool_only_true_for_true_boolean(document):
    values = [
        document["fast"],
        JsonValue(JsonType.BOOLEAN, False),
        document["port"],
        document["server"],
    ]
    assert [bool(v) for v in values] == [True, False, False, False]


def test_to_python(document):
    assert document.to_python() == {
        "server": "example.com",
        "port": 8388,
        "ratio": 2.75,
        "fast": True,
        "items": [1, "two", None],
    }


def test_to_python_last_duplicate_wins():
    value = JsonValue(JsonType.OBJECT, [("k", _int(1)), ("k", _int(2))])
    assert value.to_python() == {"k": 2}
    assert int(value["k"]) == 1


def test_parent_not_part_of_equality():
    parent = JsonValue(JsonType.ARRAY, [])
    child = JsonValue(JsonType.INTEGER, 5, parent=parent)
    assert child == _int(5)
    assert child.parent is parent