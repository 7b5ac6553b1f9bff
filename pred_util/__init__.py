"""
Predicate checking library, plus the message functions used by the allsat
tool.
"""

VERSION = '1.0.0'

from typing import Callable, Iterable, TypeVar
from textwrap import TextWrapper
import os
import sys
from typing import Optional

__all__ = ['all_satisfy', 'predicates', 'EnhancedTextWrapper',
           'set_verbosity', 'verbose', 'debug', 'error', 'info',
           'set_debug']

T = TypeVar('T')

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

class EnhancedTextWrapper(TextWrapper):
    """
    A version of textwrap.TextWrapper that handles embedded newlines more
    appropriately.
    """
    def __init__(self,
                 width: Optional[int] = None,
                 subsequent_indent: str = ''):
        """

        :param width:             wrap width. Defaults to environment variable
                                  COLUMNS (minus 1), or 79.
        :param subsequent_indent: indent prefix for subsequent lines. Defaults
                                  to empty string.
        """
        if not width:
            width = _COLUMNS

        TextWrapper.__init__(self,
                             width=width,
                             subsequent_indent=subsequent_indent)

    def fill(self, msg):
        wrapped = [TextWrapper.fill(self, line) for line in msg.split('\n')]
        return '\n'.join(wrapped)

# -----------------------------------------------------------------------------
# Private Functions
# -----------------------------------------------------------------------------

def _columns() -> int:
    columns = os.environ.get('COLUMNS', '80')
    try:
        return int(columns) - 1
    except ValueError:
        print(
            f'*** Ignoring non-numeric COLUMNS value of "{columns}". '
            'Using a width of 79.',
            file=sys.stderr
        )
        return 79

# -----------------------------------------------------------------------------
# Internal module globals
# -----------------------------------------------------------------------------

_verbose = False
_verbose_wrapper = None
_verbose_prefix = ''
_debug = False
_ERROR_PREFIX = 'ERROR: '
_DEBUG_PREFIX = '(DEBUG) '
_COLUMNS = _columns()

_debug_wrapper = EnhancedTextWrapper(
    width=_COLUMNS, subsequent_indent=' ' * len(_DEBUG_PREFIX)
)
_error_wrapper = EnhancedTextWrapper(
    width=_COLUMNS, subsequent_indent=' ' * len(_ERROR_PREFIX)
)
_no_prefix_wrapper = EnhancedTextWrapper(width=_COLUMNS)

# -----------------------------------------------------------------------------
# Public Functions
# -----------------------------------------------------------------------------

def set_debug(debug: bool) -> None:
    """
    Set or clear debug messages.

    :param debug: True or False to enable or disable debug messages
    """
    global _debug

    _debug = debug


def set_verbosity(verbose: bool,
                  verbose_prefix: Optional[str] = None) -> None:
    """
    Set or clear verbose messages.

    :param verbose:        True or False to enable or disable verbosity
    :param verbose_prefix  string to use as a prefix for verbose messages, or
                           None (or empty string) for no prefix
    """
    global _verbose
    global _verbose_prefix
    global _verbose_wrapper

    _verbose = verbose
    if _verbose:
        indent = ''
        _verbose_prefix = ''
        if verbose_prefix:
            _verbose_prefix = verbose_prefix
            indent = ' ' * len(verbose_prefix)

        _verbose_wrapper = EnhancedTextWrapper(width=_COLUMNS,
                                               subsequent_indent=indent)


def verbose(msg: str) -> None:
    """
    Conditionally emit a verbose message. See also set_verbosity().

    :param msg: the message
    """
    if _verbose:
        print(_verbose_wrapper.fill(f"{_verbose_prefix}{msg}"))


def debug(msg: str) -> None:
    """
    Conditionally emit a debug message.

    :param msg: the message
    """
    if _debug:
        print(_debug_wrapper.fill(f"{_DEBUG_PREFIX}{msg}"))


def info(msg: str) -> None:
    """
    Emit an informational message.

    :param msg: The message
    """
    print(_no_prefix_wrapper.fill(msg))


def error(msg: str) -> None:
    """
    Emit an error message.

    :param msg: The message
    """
    print(_error_wrapper.fill(f"{_ERROR_PREFIX}{msg}"))


def all_satisfy(sequence: Iterable[T], predicate: Callable[[T], bool]) -> bool:
    """
    Similar to the built-in `all()` function, this function ensures that
    `predicate()` returns a true value for every element of the supplied
    sequence. Elements are tested in order, and the function short-circuits
    on the first failure: no element after the first failing one is passed
    to the predicate. An empty sequence always satisfies the predicate.

    Any exception raised by the predicate is not caught; it stops the
    iteration and propagates to the caller.

    :param sequence:  the sequence (any iterable) to test
    :param predicate: function or lambda to call with each element

    :return: `True` if all elements pass, `False` otherwise

    >>> all_satisfy([1, 2, 3, 4, 5], lambda n: n % 2 == 0)
    False
    >>> all_satisfy([2, 4, 6, 8], lambda n: n % 2 == 0)
    True
    >>> all_satisfy(['Alice', 'Bob', 'Charlie', 'David', 'Eva'],
    ...             lambda s: len(s) > 3)
    False
    >>> all_satisfy(['Alice', 'Charlie', 'David'], lambda s: len(s) > 3)
    True
    >>> all_satisfy([], lambda x: False)
    True
    >>> import string
    >>> all_satisfy(string.ascii_uppercase, lambda c: c.isupper())
    True
    """
    for element in sequence:
        if not predicate(element):
            return False

    return True

# ---------------------------------------------------------------------------
# Fire up doctest if main()
# ---------------------------------------------------------------------------

if __name__ == '__main__':
    from doctest import testmod, ELLIPSIS
    testmod(optionflags=ELLIPSIS)
