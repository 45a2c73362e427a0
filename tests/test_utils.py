import pytest

from gocoin.utils import from_bytes, hash_value, to_bytes


def test_round_trip_dict():
    value = {"b": [1, 2, 3], "a": {"nested": "x"}, "c": None}
    assert from_bytes(to_bytes(value)) == value


def test_round_trip_list_and_scalars():
    for value in ([1, "two", 3.5], "text", 42, True):
        assert from_bytes(to_bytes(value)) == value


def test_to_bytes_returns_bytes_independent_of_key_order():
    first = to_bytes({"a": 1, "b": 2})
    second = to_bytes({"b": 2, "a": 1})
    assert isinstance(first, bytes)
    assert first == second


def test_hash_of_string_is_sha256():
    assert hash_value("abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_hash_of_empty_string():
    assert hash_value("") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_hash_is_hex_of_fixed_length():
    digest = hash_value({"height": 1, "data": "x"})
    assert len(digest) == 64
    assert set(digest) <= set("0123456789abcdef")


def test_hash_ignores_key_order_but_not_content():
    assert hash_value({"a": 1, "b": 2}) == hash_value({"b": 2, "a": 1})
    assert hash_value({"a": 1, "b": 2}) != hash_value({"a": 1, "b": 3})


def test_from_bytes_rejects_garbage():
    with pytest.raises(ValueError):
        from_bytes(b"not json at all {")


def test_to_bytes_rejects_unserialisable():
    with pytest.raises(TypeError):
        to_bytes({"key": object()})