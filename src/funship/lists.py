"""
Persistent cons lists with lazy mapping.

A :class:`Fist` is one of three shapes:

- :class:`Nilf`, the empty list (``nilf``);
- :class:`ConsFist`, a head value in front of a tail list;
- :class:`MappedFist`, a source list seen through a function value. It is
  indistinguishable from a cell whose head is ``fun(source.head)`` and whose
  tail is ``map(source.tail, fun)``, except that the pair is only computed
  when a traversal reaches it.

Lists are only ever built by prepending, so they are acyclic and tails can be
shared freely. The traversal functions in this module walk lists with loops,
forcing lazy nodes one element at a time.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any, Callable, Final, Iterator, Protocol, TypeAlias, final, overload

from typing_extensions import override

from funship.functions import Funf, as_funf, call

DEFAULT_DELIMITER: Final[str] = " "

FunLike: TypeAlias = Funf | Callable[..., Any]


class TextSink(Protocol):
    def write(self, text: str, /) -> object: ...


class ArgumentMismatch(ValueError):
    """Raised when a list function is given something that is not a Fist."""


class Fist(ABC):
    """
    A persistent singly-linked list.

    Iterating, comparing, hashing and ``repr`` all traverse the list and
    therefore force pending lazy maps.
    """

    __slots__ = ()

    @abstractmethod
    def force(self) -> Nilf | ConsFist:
        """Resolve this node to the empty list or a plain cell."""

    def __iter__(self) -> Iterator[object]:
        current = self.force()
        while isinstance(current, ConsFist):
            yield current.head
            current = current.tail.force()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Fist):
            return NotImplemented
        end = object()
        for left, right in zip_longest(self, other, fillvalue=end):
            if left is end or right is end or left != right:
                return False
        return True

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"fist({', '.join(repr(item) for item in self)})"


@final
@dataclass(frozen=True, slots=True, weakref_slot=True, eq=False, repr=False)
class Nilf(Fist):
    """The empty list."""

    @override
    def force(self) -> Nilf:
        return self


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True, eq=False, repr=False)
class ConsFist(Fist):
    head: Final[object]
    tail: Final[Fist]

    @override
    def force(self) -> ConsFist:
        return self


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True, eq=False)
class MappedFist(Fist):
    """``source`` with ``fun`` applied to each element on traversal."""

    source: Final[Fist]
    fun: Final[Funf]

    @override
    def force(self) -> Nilf | ConsFist:
        # Stacked maps are unwound in a loop, innermost function first.
        funs: list[Funf] = []
        node: Fist = self
        while isinstance(node, MappedFist):
            funs.append(node.fun)
            node = node.source
        funs.reverse()
        match node.force():
            case ConsFist(head=head, tail=tail):
                for fun in funs:
                    head = call(fun, head)
                    tail = MappedFist(source=tail, fun=fun)
                return ConsFist(head=head, tail=tail)
            case Nilf() as empty:
                return empty


nilf: Final[Nilf] = Nilf()


def _force(items: object) -> Nilf | ConsFist:
    match items:
        case Fist():
            return items.force()
        case _:
            raise ArgumentMismatch(f"expected a Fist, got {type(items).__name__}")


def cons(head: object, tail: Fist) -> Fist:
    """Prepend ``head`` to ``tail``. ``tail`` is shared, not copied."""
    if not isinstance(tail, Fist):
        raise ArgumentMismatch(f"tail must be a Fist, got {type(tail).__name__}")
    return ConsFist(head=head, tail=tail)


def fist(*items: object) -> Fist:
    """
    Build a list holding ``items`` in order.

    Examples:
        fist()            # nilf
        fist(1, 2, 3, 4)
    """
    result: Fist = nilf
    for item in reversed(items):
        result = ConsFist(head=item, tail=result)
    return result


def map(items: Fist, fun: FunLike) -> Fist:
    """
    Map ``items`` through ``fun`` lazily.

    Nothing is traversed here; ``fun`` runs on an element when a later
    traversal reaches it, once per element per traversal.

    Examples:
        mapped = map(fist(1, 2, 3, 4), lambda x: 2 * x)  # fist(2, 4, 6, 8)
    """
    if not isinstance(items, Fist):
        raise ArgumentMismatch(f"expected a Fist, got {type(items).__name__}")
    return MappedFist(source=items, fun=as_funf(fun, arity=1))


def _fold(items: Fist, acc: object, fun: FunLike) -> object:
    reducer = as_funf(fun, arity=2)
    while True:
        match _force(items):
            case Nilf():
                return acc
            case ConsFist(head=head, tail=tail):
                acc = call(reducer, head, acc)
                items = tail


@overload
def reduce(items: Fist, fun: FunLike, /) -> object: ...


@overload
def reduce(items: Fist, acc: object, fun: FunLike, /) -> object: ...


def reduce(items: Fist, *arguments: Any) -> object:
    """
    Reduce a list with a function taking an element and the accumulator.

    ``reduce(items, fun)`` starts from the first element and folds the rest;
    it returns ``nilf`` for an empty list. ``reduce(items, acc, fun)`` starts
    from ``acc`` and returns it unchanged for an empty list.

    Examples:
        reduce(fist(1, 2, 3, 4), lambda el, acc: el + acc)     # 10
        reduce(fist(1, 2, 3, 4), 0, lambda el, acc: el + acc)  # 10
    """
    match arguments:
        case (fun,):
            match _force(items):
                case Nilf():
                    return nilf
                case ConsFist(head=head, tail=tail):
                    return _fold(tail, head, fun)
        case (acc, fun):
            return _fold(items, acc, fun)
        case _:
            raise TypeError(
                f"reduce() takes 2 or 3 positional arguments but {len(arguments) + 1} were given"
            )


def reverse(items: Fist) -> Fist:
    """Return a new list with the elements of ``items`` in reverse order."""
    result: Fist = nilf
    while True:
        match _force(items):
            case Nilf():
                return result
            case ConsFist(head=head, tail=tail):
                result = ConsFist(head=head, tail=result)
                items = tail


def all(items: Fist, fun: FunLike) -> bool:
    """
    Whether ``fun`` holds for every element.

    Stops at the first element for which ``fun`` is falsy.
    """
    predicate = as_funf(fun, arity=1)
    while True:
        match _force(items):
            case Nilf():
                return True
            case ConsFist(head=head, tail=tail):
                if not call(predicate, head):
                    return False
                items = tail


def any(items: Fist, fun: FunLike) -> bool:
    """
    Whether ``fun`` holds for at least one element.

    Stops at the first element for which ``fun`` is truthy.
    """
    predicate = as_funf(fun, arity=1)
    while True:
        match _force(items):
            case Nilf():
                return False
            case ConsFist(head=head, tail=tail):
                if call(predicate, head):
                    return True
                items = tail


def _resolve_sink(
    writer: TextSink | str | None, delimiter: str | None
) -> tuple[TextSink, str]:
    # print(items, "; ") passes the delimiter in the writer position.
    if isinstance(writer, str):
        if delimiter is not None:
            raise TypeError(
                "delimiter given both in the writer position and as delimiter="
            )
        return sys.stdout, writer
    if delimiter is None:
        delimiter = DEFAULT_DELIMITER
    if writer is None:
        return sys.stdout, delimiter
    return writer, delimiter


def _write(items: Fist, sink: TextSink, delimiter: str) -> None:
    match _force(items):
        case Nilf():
            return
        case ConsFist(head=head, tail=tail):
            pass
    while True:
        match _force(tail):
            case Nilf():
                sink.write(str(head))
                return
            case ConsFist(head=following, tail=rest):
                sink.write(f"{head!s}{delimiter}")
                head, tail = following, rest


def print(
    items: Fist,
    writer: TextSink | str | None = None,
    delimiter: str | None = None,
) -> Fist:
    """
    Write the elements of ``items`` separated by ``delimiter``.

    Args:
        items: The list to write.
        writer: Any object with a ``write(str)`` method. Defaults to
            ``sys.stdout``. A string here is taken as the delimiter, in
            which case ``delimiter`` must be left out.
        delimiter: Written between elements, not after the last one.
            Defaults to ``DEFAULT_DELIMITER``, a single space.

    Returns:
        ``items``, so calls can be chained.

    Examples:
        sink = io.StringIO()
        print(fist(1, 2, 3, 4), sink, "; ")  # sink holds "1; 2; 3; 4"
    """
    sink, delimiter = _resolve_sink(writer, delimiter)
    _write(items, sink, delimiter)
    return items


def println(
    items: Fist,
    writer: TextSink | str | None = None,
    delimiter: str | None = None,
) -> Fist:
    """Like :func:`print`, followed by a line break even for an empty list."""
    sink, delimiter = _resolve_sink(writer, delimiter)
    _write(items, sink, delimiter)
    sink.write("\n")
    return items
