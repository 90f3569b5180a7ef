"""Tests for Result (Ok/Err), Option (Some/Nothing) and collect."""

import pytest
from hypothesis import given

from async_extra import Err, Nothing, NothingType, Ok, Some, collect
from tests.strategies import integers, results


class TestOk:
    """Tests for the Ok variant."""

    def test_ok_holds_value(self):
        assert Ok(42).value == 42
        assert Ok(42).is_ok()
        assert not Ok(42).is_err()

    def test_ok_is_frozen(self):
        """Ok instances are immutable."""
        ok = Ok(42)
        with pytest.raises(AttributeError):
            ok.value = 100  # type: ignore[misc]

    def test_ok_equality_is_structural(self):
        assert Ok([1, 2, 3]) == Ok([1, 2, 3])
        assert Ok(1) != Err(1)

    def test_ok_map_and_map_err(self):
        assert Ok(5).map(lambda x: x * 2) == Ok(10)
        assert Ok(5).map_err(str.upper) == Ok(5)

    def test_ok_and_then_or_else(self):
        assert Ok(5).and_then(lambda x: Err(f'bad {x}')) == Err('bad 5')
        assert Ok(5).or_else(lambda e: Ok(0)) == Ok(5)

    def test_ok_unwrap_family(self):
        assert Ok(1).unwrap() == 1
        assert Ok(1).unwrap_or(0) == 1
        assert Ok(1).unwrap_or_else(lambda e: 0) == 1
        assert Ok(1).expect('never') == 1

    def test_ok_to_option(self):
        assert Ok(1).ok() == Some(1)
        assert Ok(1).err() is Nothing


class TestErr:
    """Tests for the Err variant."""

    def test_err_holds_error(self):
        assert Err('boom').error == 'boom'
        assert Err('boom').is_err()

    def test_err_map_skips_function(self):
        called = []
        assert Err('boom').map(called.append) == Err('boom')
        assert called == []

    def test_err_map_err(self):
        assert Err('boom').map_err(str.upper) == Err('BOOM')

    def test_err_or_else_recovers(self):
        assert Err('boom').or_else(lambda e: Ok(len(e))) == Ok(4)

    def test_err_unwrap_raises(self):
        with pytest.raises(RuntimeError, match='boom'):
            Err('boom').unwrap()

    def test_err_expect_raises_with_message(self):
        with pytest.raises(RuntimeError, match='loading config'):
            Err('boom').expect('loading config')

    def test_err_unwrap_or_else_receives_error(self):
        assert Err('boom').unwrap_or_else(len) == 4

    def test_err_to_option(self):
        assert Err('boom').ok() is Nothing
        assert Err('boom').err() == Some('boom')


class TestOption:
    """Tests for Some and Nothing."""

    def test_some_ok_or(self):
        assert Some(1).ok_or('missing') == Ok(1)

    def test_nothing_ok_or(self):
        assert Nothing.ok_or('missing') == Err('missing')

    def test_nothing_is_singleton_like(self):
        assert NothingType() == Nothing
        assert Nothing.is_none()
        assert not Nothing.is_some()

    def test_some_none_is_present(self):
        assert Some(None).is_some()
        assert Some(None).ok_or('missing') == Ok(None)

    def test_nothing_unwrap_raises(self):
        with pytest.raises(RuntimeError):
            Nothing.unwrap()

    def test_map_and_then(self):
        assert Some(2).map(lambda x: x + 1) == Some(3)
        assert Some(2).and_then(lambda x: Nothing) is Nothing
        assert Nothing.map(lambda x: x + 1) is Nothing
        assert Nothing.unwrap_or(7) == 7


class TestCollect:
    """Tests for collect()."""

    def test_collect_all_ok(self):
        assert collect([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])

    def test_collect_first_err_wins(self):
        assert collect([Ok(1), Err('a'), Err('b')]) == Err('a')

    def test_collect_stops_consuming_at_err(self):
        consumed = []

        def gen():
            for r in (Ok(1), Err('stop'), Ok(3)):
                consumed.append(r)
                yield r

        assert collect(gen()) == Err('stop')
        assert consumed == [Ok(1), Err('stop')]

    @given(results)
    def test_map_identity(self, result):
        assert result.map(lambda x: x) == result

    @given(integers)
    def test_ok_and_then_left_identity(self, value):
        assert Ok(value).and_then(lambda x: Ok(x * 3)) == Ok(value * 3)
