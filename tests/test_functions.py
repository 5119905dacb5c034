"""Tests for function values: wrapping, calling, capture, and composition."""

import logging
import operator
from dataclasses import FrozenInstanceError

import pytest

from funship import (
    CapturedFunf,
    ComposedFunf,
    Funf,
    Overflow,
    WrappedFunf,
    as_funf,
    call,
    capture,
    compose,
    funf,
    infer_arity,
)


def _hash_arguments(*args: object) -> int:
    return hash(args)


class TestWrap:
    """Test wrapping native callables."""

    @pytest.mark.parametrize("arity", range(17))
    def test_call_with_exact_arity_matches_native_call(self, arity: int) -> None:
        fun = funf(_hash_arguments, arity=arity)
        arguments = tuple(range(1, arity + 1))
        assert fun.arity == arity
        assert call(fun, *arguments) == _hash_arguments(*arguments)

    def test_arity_is_inferred_from_signature(self) -> None:
        assert funf(lambda: 0).arity == 0
        assert funf(lambda a1: a1).arity == 1
        assert funf(lambda a1, a2, a3: a1).arity == 3
        assert funf(operator.add).arity == 2

    def test_parameters_with_defaults_are_not_counted(self) -> None:
        def scale(value, factor=2, *, offset=0):
            return value * factor + offset

        fun = funf(scale)
        assert fun.arity == 1
        assert fun(5) == 10

    def test_variadic_callable_needs_explicit_arity(self) -> None:
        with pytest.raises(TypeError):
            funf(lambda *xs: sum(xs))
        assert funf(lambda *xs: sum(xs), arity=3)(1, 2, 3) == 6

    def test_required_keyword_only_parameter_is_rejected(self) -> None:
        def needs_keyword(value, *, unit):
            return f"{value}{unit}"

        with pytest.raises(TypeError):
            infer_arity(needs_keyword)

    def test_negative_arity_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            funf(lambda: 0, arity=-1)

    def test_default_functions(self) -> None:
        assert funf(arity=1)(5) == 5
        assert funf(arity=3)(1, 2, 3) == (1, 2, 3)
        assert funf(arity=0)() == ()

    def test_missing_function_and_arity(self) -> None:
        with pytest.raises(TypeError):
            funf()

    def test_zero_arity_calls_immediately(self) -> None:
        fun = funf(lambda: 42)
        assert fun() == 42
        assert call(fun) == 42

    def test_as_funf(self) -> None:
        fun = funf(lambda x: x)
        assert as_funf(fun) is fun
        assert isinstance(as_funf(len), WrappedFunf)
        with pytest.raises(TypeError):
            as_funf(42)  # type: ignore[arg-type]

    def test_as_funf_with_arity(self) -> None:
        assert as_funf(str, arity=1)(5) == "5"
        assert as_funf(max, arity=2)(1, 4) == 4
        fun = funf(lambda a, b: a + b)
        assert as_funf(fun, arity=1) is fun
        assert as_funf(fun, arity=1).arity == 2


class TestOverflow:
    """Test calling with more arguments than the arity."""

    def test_result_followed_by_leftovers(self) -> None:
        add = funf(lambda a, b: a + b)
        result = call(add, 1, 2, 3, 4)
        assert isinstance(result, Overflow)
        assert result == (3, 3, 4)
        assert result.result == 3
        assert result.leftovers == (3, 4)

    def test_zero_arity_overflow(self) -> None:
        assert call(funf(lambda: 0), "a", "b") == (0, "a", "b")

    def test_only_first_arity_arguments_reach_callable(self) -> None:
        seen: list[tuple[object, ...]] = []
        fun = funf(lambda a, b: seen.append((a, b)))
        call(fun, 1, 2, 3)
        assert seen == [(1, 2)]

    def test_overflow_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="funship.functions"):
            call(funf(lambda a: a), 1, 2)
        assert "overflow" in caplog.text


class TestCapture:
    """Test partial application and explicit capture."""

    def test_fewer_arguments_capture(self) -> None:
        add3 = funf(lambda a, b, c: a + b + c)
        partial = call(add3, 1)
        assert isinstance(partial, CapturedFunf)
        assert partial.arity == 2
        assert call(partial, 2, 3) == 6
        assert partial(2)(3) == 6

    @pytest.mark.parametrize("split", range(4))
    def test_partial_application_matches_full_call(self, split: int) -> None:
        fun = funf(lambda a, b, c, d: (a, b, c, d))
        arguments = ("w", "x", "y", "z")
        head, rest = arguments[:split], arguments[split:]
        assert call(capture(fun, *head), *rest) == call(fun, *arguments)

    def test_capture_never_executes(self, counting) -> None:
        counter = counting(lambda a, b: a + b)
        captured = capture(counter.as_funf(2), 1, 2)
        assert captured.arity == 0
        assert counter.calls == 0
        assert captured() == 3
        assert counter.calls == 1

    def test_capture_beyond_arity_overflows_on_call(self) -> None:
        add = funf(lambda a, b: a + b)
        captured = capture(add, 1, 2, 3)
        assert captured.arity == -1
        assert captured() == (3, 3)

    def test_capture_leaves_original_untouched(self) -> None:
        add = funf(lambda a, b: a + b)
        capture(add, 1)
        assert add.arity == 2
        with pytest.raises(FrozenInstanceError):
            add.declared_arity = 5  # type: ignore[misc]

    def test_funf_argument_is_composed(self) -> None:
        add = funf(lambda a, b: a + b)
        inc = funf(lambda x: x + 1)
        chained = capture(add, 10, inc)
        assert chained(5) == 16

    def test_arguments_after_funf_argument_feed_it_first(self) -> None:
        triple = funf(lambda a, b, c: (a, b, c))
        pair = funf(lambda x, y: x * y)
        chained = capture(triple, "a", pair, 3)
        assert chained(4, "c") == ("a", 12, "c")

    def test_partial_call_with_funf_argument_composes(self) -> None:
        add = funf(lambda a, b: a + b)
        inc = funf(lambda x: x + 1)
        chained = call(add, inc)
        assert isinstance(chained, Funf)
        assert chained(4, 5) == 10

    def test_full_call_passes_funf_argument_through(self) -> None:
        apply = funf(lambda fun, value: fun(value))
        inc = funf(lambda x: x + 1)
        assert call(apply, inc, 1) == 2


class TestCompose:
    """Test composition of function values."""

    def test_compose_two_funs(self) -> None:
        minus_two = funf(lambda x: x - 2)
        double = funf(lambda y: y * 2)
        h = compose(double, minus_two)
        assert isinstance(h, ComposedFunf)
        assert h(10) == 16

    def test_arity_is_sum(self) -> None:
        f = funf(lambda a, b, c: a)
        g = funf(lambda a, b: a)
        assert compose(g, f).arity == 5

    def test_composition_law(self) -> None:
        f = funf(lambda a, b: a * b)
        g = funf(lambda x, y: x - y)
        h = compose(g, f)
        assert call(h, 2, 3, 4, 5) == call(g, call(f, 2, 3), 4, 5)

    def test_gathers_until_inner_is_satisfied(self, counting) -> None:
        counter = counting(lambda a, b: a * b)
        g = funf(lambda x, y: x - y)
        h = compose(g, counter.as_funf(2))
        gathering = call(h, 2)
        assert isinstance(gathering, ComposedFunf)
        assert gathering.arity == 3
        assert counter.calls == 0
        waiting_for_outer = call(gathering, 3)
        assert counter.calls == 1
        assert isinstance(waiting_for_outer, Funf)
        assert waiting_for_outer.arity == 1
        assert waiting_for_outer(4) == 2

    def test_inner_overflow_is_passed_on(self) -> None:
        add = funf(lambda a, b: a + b)
        negate = funf(lambda x: -x)
        h = compose(negate, capture(add, 1, 2, 3))
        assert h.arity == 0
        assert h() == (-3, 3)

    def test_nested_composition(self) -> None:
        inc = funf(lambda x: x + 1)
        double = funf(lambda x: x * 2)
        square = funf(lambda x: x * x)
        h = compose(compose(square, double), inc)
        assert h(3) == 64

    def test_callable_failure_propagates(self) -> None:
        invert = funf(lambda x: 1 / x)
        h = compose(funf(lambda x: x), invert)
        with pytest.raises(ZeroDivisionError):
            h(0)
