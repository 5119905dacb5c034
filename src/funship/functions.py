"""
Function values with arity-aware calling.

A :class:`Funf` wraps a Python callable together with the number of arguments
it still needs. :func:`call` decides what to do with the arguments it is given:

- as many as the arity: the callable runs and its result is returned;
- fewer: they are captured and a new Funf of smaller arity is returned;
- more: the callable runs on its share and the result comes back in an
  :class:`Overflow` together with the unused arguments, in order.

Funf values are immutable. Capturing and composing always build new values
that reference their parents.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from inspect import Parameter, signature
from typing import Any, Callable, Final, TypeAlias, final

from typing_extensions import override

_logger: Final[logging.Logger] = logging.getLogger(__name__)

_POSITIONAL_KINDS: Final = frozenset(
    (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
)

NativeCallable: TypeAlias = Callable[..., Any]


class Funf(ABC):
    """
    A function value.

    ``arity`` is the number of arguments needed before the underlying callable
    runs. It may be negative when more arguments have been captured than the
    callable takes; calling such a value yields an :class:`Overflow`.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def arity(self) -> int: ...

    @abstractmethod
    def apply(self, arguments: tuple[object, ...]) -> object:
        """
        Feed ``arguments`` to this function value.

        :param arguments: Arguments in positional order.
        :return: The callable's result, an :class:`Overflow`, or a new Funf.
        """

    def __call__(self, *args: object) -> object:
        return call(self, *args)


@final
class Overflow(tuple[object, ...]):
    """
    A result followed by the arguments the callable did not consume.

    Being a tuple, ``Overflow((3, "a"))`` compares equal to ``(3, "a")``.
    """

    __slots__ = ()

    @property
    def result(self) -> object:
        return self[0]

    @property
    def leftovers(self) -> tuple[object, ...]:
        return self[1:]

    def __repr__(self) -> str:
        return f"Overflow{tuple.__repr__(self)}"


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class WrappedFunf(Funf):
    """Leaf function value owning a native callable."""

    function: Final[NativeCallable]
    declared_arity: Final[int]

    @property
    @override
    def arity(self) -> int:
        return self.declared_arity

    @override
    def apply(self, arguments: tuple[object, ...]) -> object:
        arity = self.declared_arity
        count = len(arguments)
        if count > arity:
            _logger.debug(
                "overflow: %d argument(s) given for arity %d", count, arity
            )
            return Overflow((self.function(*arguments[:arity]), *arguments[arity:]))
        if count == arity:
            return self.function(*arguments)
        return capture(self, *arguments)


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class CapturedFunf(Funf):
    """Function value holding arguments to be prepended to later ones."""

    inner: Final[Funf]
    arguments: Final[tuple[object, ...]]

    @property
    @override
    def arity(self) -> int:
        return self.inner.arity - len(self.arguments)

    @override
    def apply(self, arguments: tuple[object, ...]) -> object:
        return call(self.inner, *self.arguments, *arguments)


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class ComposedFunf(Funf):
    """
    ``outer`` applied to the result of ``inner``.

    Arguments are gathered for ``inner`` until it is satisfied. Its result,
    followed by whatever arguments ``inner`` did not take, then goes to
    ``outer``.
    """

    outer: Final[Funf]
    inner: Final[Funf]
    arguments: Final[tuple[object, ...]] = ()

    @property
    @override
    def arity(self) -> int:
        return self.inner.arity + self.outer.arity - len(self.arguments)

    @override
    def apply(self, arguments: tuple[object, ...]) -> object:
        gathered = (*self.arguments, *arguments)
        share = self.inner.arity
        if len(gathered) < share:
            return ComposedFunf(outer=self.outer, inner=self.inner, arguments=gathered)
        share = max(share, 0)
        result = call(self.inner, *gathered[:share])
        leftovers = gathered[share:]
        _logger.debug(
            "composed: inner took %d argument(s), %d left for outer",
            share,
            len(leftovers),
        )
        # An overflowing inner hands its leftovers on before ours.
        if isinstance(result, Overflow):
            return call(self.outer, *result, *leftovers)
        return call(self.outer, result, *leftovers)


def call(fun: Funf, *args: object) -> object:
    """
    Call a function value.

    Examples:
        add = funf(lambda a, b: a + b)
        call(add, 1, 2)        # 3
        call(add, 1)           # Funf of arity 1
        call(add, 1, 2, 3, 4)  # Overflow((3, 3, 4))
    """
    return fun.apply(args)


def capture(fun: Funf, *args: object) -> Funf:
    """
    Bind ``args`` to ``fun`` without running anything.

    The returned arity is ``fun.arity - len(args)`` and may be zero or
    negative. An argument that is itself a Funf is composed in place: the
    arguments before it are captured onto ``fun``, the argument Funf is
    composed underneath, and the arguments after it feed the argument Funf
    first.
    """
    for index, argument in enumerate(args):
        if isinstance(argument, Funf):
            head = CapturedFunf(inner=fun, arguments=args[:index]) if index else fun
            return capture(compose(head, argument), *args[index + 1 :])
    return CapturedFunf(inner=fun, arguments=args)


def compose(outer: Funf, inner: Funf) -> Funf:
    """
    Chain two function values: ``compose(g, f)`` runs ``f`` first, then ``g``.

    Examples:
        h = compose(funf(lambda y: y * 2), funf(lambda x: x - 2))
        h(10)  # 16
    """
    return ComposedFunf(outer=outer, inner=inner)


def infer_arity(function: NativeCallable) -> int:
    """
    Count the required positional parameters of ``function``.

    Raises ``TypeError`` for callables that cannot be called with a fixed
    number of positional arguments.
    """
    try:
        parameters = signature(function).parameters.values()
    except (TypeError, ValueError) as e:
        raise TypeError(
            f"cannot infer the arity of {function!r}; pass arity= explicitly"
        ) from e
    arity = 0
    for parameter in parameters:
        if parameter.kind is Parameter.VAR_POSITIONAL:
            raise TypeError(
                f"{function!r} takes *{parameter.name}; pass arity= explicitly"
            )
        if parameter.default is not Parameter.empty:
            continue
        if parameter.kind is Parameter.KEYWORD_ONLY:
            raise TypeError(
                f"{function!r} requires keyword-only argument {parameter.name!r}"
            )
        if parameter.kind in _POSITIONAL_KINDS:
            arity += 1
    return arity


def _identity(argument: object) -> object:
    return argument


def _pack(*arguments: object) -> tuple[object, ...]:
    return arguments


def funf(
    function: NativeCallable | None = None, /, *, arity: int | None = None
) -> Funf:
    """
    Wrap a native callable as a function value.

    Args:
        function: Positional callable. When omitted, an identity is wrapped
            for ``arity == 1`` and a tuple builder for any other arity.
        arity: Number of arguments to pass. Inferred from the signature of
            ``function`` when omitted.

    Examples:
        funf(lambda: 0)()                      # 0
        funf(lambda a1, a2: a1 + a2)(1, 1)     # 2
        funf(lambda *xs: sum(xs), arity=3)(1, 2, 3)  # 6
    """
    if arity is not None and arity < 0:
        raise ValueError(f"arity must not be negative, got {arity}")
    if function is None:
        if arity is None:
            raise TypeError("funf() needs a function or an explicit arity")
        function = _identity if arity == 1 else _pack
    elif arity is None:
        arity = infer_arity(function)
    return WrappedFunf(function=function, declared_arity=arity)


def as_funf(value: Funf | NativeCallable, *, arity: int | None = None) -> Funf:
    """
    Return ``value`` if it already is a Funf, otherwise wrap it.

    ``arity`` is used for wrapping only; a Funf keeps its own arity.
    """
    if isinstance(value, Funf):
        return value
    if not callable(value):
        raise TypeError(f"{value!r} is not callable")
    return funf(value, arity=arity)
