"""
funship: arity-aware function values and lazy persistent lists.

## Function values

`funf` wraps a Python callable and remembers how many arguments it takes.
`call` (or calling the value directly) then partially applies, runs, or
overflows depending on how many arguments arrive:

```python
from funship import call, capture, compose, funf

add = funf(lambda a, b: a + b)
add(1, 2)           # 3
inc = add(1)        # arity 1
inc(41)             # 42
add(1, 2, 3)        # Overflow((3, 3)): result plus the unused argument

double = funf(lambda x: x * 2)
minus_two = funf(lambda x: x - 2)
compose(double, minus_two)(10)  # 16

# A function value passed where a value is expected is composed in place.
capture(add, 10, minus_two)(5)  # add(10, minus_two(5)) == 13
```

## Lists

`fist` builds a persistent cons list. `map` is lazy; every other function
traverses the list and forces pending maps as it goes:

```python
import funship

numbers = funship.fist(1, 2, 3, 4)
funship.reduce(numbers, lambda el, acc: el + acc)             # 10
doubled = funship.map(numbers, lambda x: 2 * x)               # nothing runs yet
funship.println(doubled, delimiter="; ")                      # prints "2; 4; 6; 8"
funship.all(numbers, lambda x: x < 5)                         # True
funship.reverse(numbers)                                      # fist(4, 3, 2, 1)
```
"""

from funship.functions import (
    CapturedFunf,
    ComposedFunf,
    Funf,
    NativeCallable,
    Overflow,
    WrappedFunf,
    as_funf,
    call,
    capture,
    compose,
    funf,
    infer_arity,
)
from funship.lists import (
    DEFAULT_DELIMITER,
    ArgumentMismatch,
    ConsFist,
    Fist,
    MappedFist,
    Nilf,
    TextSink,
    all,
    any,
    cons,
    fist,
    map,
    nilf,
    print,
    println,
    reduce,
    reverse,
)

__all__ = [
    "DEFAULT_DELIMITER",
    "ArgumentMismatch",
    "CapturedFunf",
    "ComposedFunf",
    "ConsFist",
    "Fist",
    "Funf",
    "MappedFist",
    "NativeCallable",
    "Nilf",
    "Overflow",
    "TextSink",
    "WrappedFunf",
    "all",
    "any",
    "as_funf",
    "call",
    "capture",
    "compose",
    "cons",
    "fist",
    "funf",
    "infer_arity",
    "map",
    "nilf",
    "print",
    "println",
    "reduce",
    "reverse",
]
