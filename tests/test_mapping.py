"""Tests for the mapping helpers."""

import pytest

from commonx import SKIP, Err, Ok, Symbol, sym
from commonx import mapping


class TestMerge:
    def test_merges_with_function(self):
        result = mapping.merge({"a": 5}, {"a": 5, "b": 5}, lambda _, x, y: Ok(x * y))
        assert result == Ok({"a": 25, "b": 5})

    def test_conflict_order_of_values(self):
        result = mapping.merge({"a": 1, "b": 2, "c": 3}, {"a": 10},
                               lambda _, v1, v2: Ok((v1, v2)))
        assert result == Ok({"a": (1, 10), "b": 2, "c": 3})
        result = mapping.merge({"a": 1}, {"a": 10, "b": 2},
                               lambda _, v1, v2: Ok((v1, v2)))
        assert result == Ok({"a": (1, 10), "b": 2})

    def test_keys_of_first_map_come_first(self):
        result = mapping.merge({"a": 1, "b": 2}, {"a": 3, "d": 4}, lambda _, v1, v2: Ok(v1 + v2))
        assert list(result.value) == ["a", "b", "d"]
        assert result.value == {"a": 4, "b": 2, "d": 4}

    def test_error_out(self):
        error = Err("mocked_to_fail")
        assert mapping.merge({"a": 5}, {"a": 5, "b": 5}, lambda *_: error) == error
        assert mapping.merge({"a": 5, "b": 5}, {"a": 5}, lambda *_: error) == error

    def test_bare_value_rejected(self):
        with pytest.raises(TypeError, match="expected Ok or Err"):
            mapping.merge({"a": 1}, {"a": 2, "b": 3}, lambda _, x, y: x + y)
        with pytest.raises(TypeError, match="expected Ok or Err"):
            mapping.merge({"a": 1, "b": 3}, {"a": 2}, lambda _, x, y: x + y)

    def test_inputs_not_mutated(self):
        m1, m2 = {"a": 1}, {"a": 2, "b": 3}
        mapping.merge(m1, m2, lambda _, x, y: Ok(x + y))
        assert m1 == {"a": 1}
        assert m2 == {"a": 2, "b": 3}


class TestGetFetchDelete:
    def test_get_symbol(self):
        assert mapping.get({sym("a"): 5, sym("b"): 6}, sym("a")) == 5
        assert mapping.get({sym("a"): 5}, sym("a"), 7) == 5

    def test_get_falls_back_to_string(self):
        assert mapping.get({"a": 5, "b": 6}, sym("a")) == 5
        assert mapping.get({"a": 5, "b": 6}, sym("a"), 7) == 5

    def test_missing_key_goes_default(self):
        assert mapping.get({sym("a"): 5}, sym("c")) is None
        assert mapping.get({sym("a"): 5}, sym("c"), 7) == 7
        assert mapping.get({"a": 5}, sym("c"), 7) == 7

    def test_fetch(self):
        assert mapping.fetch({sym("a"): 1}, sym("a")) == Ok(1)
        assert mapping.fetch({"a": 1}, sym("a")) == Ok(1)
        assert mapping.fetch({sym("a"): 1}, sym("b")) == Err(sym("b"))

    def test_fetch_none_value(self):
        assert mapping.fetch({"a": None}, sym("a")) == Ok(None)

    def test_delete(self):
        assert mapping.delete({sym("a"): 5, sym("b"): 6}, sym("a")) == {sym("b"): 6}
        assert mapping.delete({sym("a"): 5}, sym("c")) == {sym("a"): 5}
        assert mapping.delete({"a": 5, "b": 6}, sym("a")) == {"b": 6}
        assert mapping.delete({"a": 5, "b": 6}, sym("c")) == {"a": 5, "b": 6}


class TestNew:
    def test_builds_dict(self):
        assert mapping.new(["a", "b"], lambda x: Ok((x, x))) == Ok({"a": "a", "b": "b"})

    def test_skip(self):
        result = mapping.new(range(1, 6), lambda x: SKIP if x % 2 == 0 else Ok((x, x)))
        assert result == Ok({1: 1, 3: 3, 5: 5})

    def test_last_duplicate_wins(self):
        assert mapping.new([1, 2, 3], lambda x: Ok(("k", x))) == Ok({"k": 3})

    def test_error_halts(self):
        seen = []

        def transform(x):
            seen.append(x)
            return Err(x) if x == 2 else Ok((x, x))

        assert mapping.new([1, 2, 3], transform) == Err(2)
        assert seen == [1, 2]


class TestUpdateIfExists:
    def test_existing(self):
        assert mapping.update_if_exists({"a": 1}, "a", lambda v: v * 2) == {"a": 2}

    def test_missing(self):
        assert mapping.update_if_exists({"a": 1}, "b", lambda v: v * 2) == {"a": 1}

    def test_not_a_mapping(self):
        with pytest.raises(TypeError, match="expected a mapping"):
            mapping.update_if_exists([("a", 5)], "a", lambda v: v * 2)


class TestKeyTransforms:
    def test_atomize(self):
        assert mapping.atomize({"a": 5}) == {sym("a"): 5}
        assert mapping.atomize({sym("a"): 5}) == {sym("a"): 5}

    def test_atomize_nested(self):
        result = mapping.atomize({"a": [{"b": 1}], "c": {"d": 2}})
        assert result == {sym("a"): [{sym("b"): 1}], sym("c"): {sym("d"): 2}}

    def test_atomize_strict(self):
        sym("strict_known")
        assert mapping.atomize_strict({"strict_known": 5}) == {sym("strict_known"): 5}

    def test_atomize_strict_unknown(self):
        assert not Symbol.is_interned("non existing")
        with pytest.raises(ValueError):
            mapping.atomize_strict({"non existing": 5})

    def test_stringify(self):
        assert mapping.stringify({sym("a"): 5}) == {"a": 5}
        assert mapping.stringify({"a": 5}) == {"a": 5}

    def test_stringify_nested(self):
        assert mapping.stringify({sym("a"): [{sym("a"): 6}]}) == {"a": [{"a": 6}]}
