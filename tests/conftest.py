"""Test utilities and fixtures for funship tests."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import final

import pytest

from funship import Funf, funf


@final
@dataclass(kw_only=True, slots=True)
class CountingFunction:
    """Test utility: callable that records how many times it ran."""

    function: Callable[..., object]
    calls: int = 0

    def __call__(self, *args: object) -> object:
        self.calls += 1
        return self.function(*args)

    def as_funf(self, arity: int) -> Funf:
        return funf(self, arity=arity)


@pytest.fixture
def counting() -> Callable[[Callable[..., object]], CountingFunction]:
    """Factory fixture wrapping a function in a call counter."""

    def factory(function: Callable[..., object]) -> CountingFunction:
        return CountingFunction(function=function)

    return factory
