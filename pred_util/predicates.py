"""
Common predicates, and a registry that maps predicate names (as used on the
allsat command line and in checks files) to the functions that build them.

Plain predicates take the element to test. Factory predicates take an
argument and return the predicate, e.g.:

>>> p = length_greater_than(3)
>>> p('Alice'), p('Bob')
(True, False)
>>> lookup_predicate('is_even')(4)
True
>>> lookup_predicate('divisible_by', '3')(9)
True
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Sized

__all__ = ['PredicateError', 'PredicateInfo', 'PREDICATES', 'is_even',
           'is_odd', 'is_positive', 'is_negative', 'is_nonempty',
           'greater_than', 'less_than', 'divisible_by',
           'length_greater_than', 'length_less_than', 'starts_with',
           'lookup_predicate', 'predicate_value_type', 'predicate_names',
           'convert_value']

Predicate = Callable[[Any], bool]

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

class PredicateError(ValueError):
    """
    Thrown to indicate an unknown predicate name or a bad predicate
    argument.
    """
    def __init__(self, msg: str = ''):
        ValueError.__init__(self, msg)
        self.message = msg


@dataclass(frozen=True)
class PredicateInfo:
    """
    Registry entry for a named predicate.

    `arg_type` is None for plain predicates. For factory predicates, it's
    the type the argument is converted to before the factory is called.
    `value_type` is the type elements are converted to when they're read as
    strings (from the command line, for instance).
    """
    name: str
    function: Callable[..., Any]
    value_type: type
    arg_type: Optional[type] = None
    description: str = ''

    @property
    def takes_argument(self) -> bool:
        return self.arg_type is not None

# -----------------------------------------------------------------------------
# Plain predicates
# -----------------------------------------------------------------------------

def is_even(n: int) -> bool:
    return n % 2 == 0


def is_odd(n: int) -> bool:
    return n % 2 != 0


def is_positive(n: int) -> bool:
    return n > 0


def is_negative(n: int) -> bool:
    return n < 0


def is_nonempty(s: Sized) -> bool:
    return len(s) > 0

# -----------------------------------------------------------------------------
# Predicate factories
# -----------------------------------------------------------------------------

def greater_than(limit: int) -> Predicate:
    return lambda n: n > limit


def less_than(limit: int) -> Predicate:
    return lambda n: n < limit


def divisible_by(divisor: int) -> Predicate:
    """
    Create a predicate that tests whether a number is an exact multiple of
    `divisor`.

    :param divisor: the divisor; must not be zero

    :return: the predicate
    """
    if divisor == 0:
        raise PredicateError('divisible_by: divisor cannot be 0.')
    return lambda n: n % divisor == 0


def length_greater_than(length: int) -> Predicate:
    return lambda s: len(s) > length


def length_less_than(length: int) -> Predicate:
    return lambda s: len(s) < length


def starts_with(prefix: str) -> Predicate:
    return lambda s: s.startswith(prefix)

# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

def _registry(*entries: PredicateInfo) -> Dict[str, PredicateInfo]:
    return {e.name: e for e in entries}


PREDICATES = _registry(
    PredicateInfo('is_even', is_even, int,
                  description='number is even'),
    PredicateInfo('is_odd', is_odd, int,
                  description='number is odd'),
    PredicateInfo('is_positive', is_positive, int,
                  description='number is greater than 0'),
    PredicateInfo('is_negative', is_negative, int,
                  description='number is less than 0'),
    PredicateInfo('is_nonempty', is_nonempty, str,
                  description='string is not empty'),
    PredicateInfo('greater_than', greater_than, int, int,
                  description='number is greater than ARG'),
    PredicateInfo('less_than', less_than, int, int,
                  description='number is less than ARG'),
    PredicateInfo('divisible_by', divisible_by, int, int,
                  description='number is a multiple of ARG'),
    PredicateInfo('length_greater_than', length_greater_than, str, int,
                  description='string is longer than ARG characters'),
    PredicateInfo('length_less_than', length_less_than, str, int,
                  description='string is shorter than ARG characters'),
    PredicateInfo('starts_with', starts_with, str, str,
                  description='string starts with ARG'),
)

# -----------------------------------------------------------------------------
# Public Functions
# -----------------------------------------------------------------------------

def convert_value(value: Any, to_type: type) -> Any:
    """
    Convert a value (from the command line or a checks file) to the type a
    predicate expects. Integers must be real integers or strings holding
    an integer; floats and booleans are rejected rather than truncated.

    >>> convert_value("-3", int)
    -3
    >>> convert_value(2.5, int)
    Traceback (most recent call last):
    ...
    ValueError: not an integer: 2.5

    :param value:   the value
    :param to_type: the target type (int or str)

    :return: the converted value
    :raises ValueError: the value can't be converted
    """
    if to_type is int:
        if isinstance(value, bool):
            raise ValueError(f"not an integer: {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            return int(value)
        raise ValueError(f"not an integer: {value!r}")

    return to_type(value)


def predicate_names() -> Sequence[str]:
    """
    :return: the registered predicate names, sorted
    """
    return tuple(sorted(PREDICATES.keys()))


def _get_info(name: str) -> PredicateInfo:
    info = PREDICATES.get(name)
    if info is None:
        names = ', '.join(predicate_names())
        raise PredicateError(
            f'Unknown predicate "{name}". Valid predicates: {names}'
        )
    return info


def predicate_value_type(name: str) -> type:
    """
    Get the type a named predicate expects its elements to have.

    :param name: the predicate name

    :return: the type (currently int or str)
    :raises PredicateError: unknown predicate
    """
    return _get_info(name).value_type


def lookup_predicate(name: str, arg: Optional[Any] = None) -> Predicate:
    """
    Build a predicate from its registered name and (for factory
    predicates) its argument. The argument is converted to the type the
    factory expects, so strings from the command line are fine.

    :param name: the predicate name
    :param arg:  the argument, or None for plain predicates

    :return: the predicate
    :raises PredicateError: unknown name, missing or unexpected argument, or
                            an argument that can't be converted
    """
    info = _get_info(name)
    if not info.takes_argument:
        if arg is not None:
            raise PredicateError(
                f'Predicate "{name}" does not take an argument.'
            )
        return info.function

    if arg is None:
        raise PredicateError(f'Predicate "{name}" requires an argument.')

    try:
        converted = convert_value(arg, info.arg_type)
    except (TypeError, ValueError):
        raise PredicateError(
            f'Bad argument "{arg}" for predicate "{name}": expected ' +
            f'{info.arg_type.__name__}.'
        )

    return info.function(converted)
