"""
Tool and library to check whether every value in a sequence satisfies a
predicate.

To see the command line usage, run "allsat -h".

To use the library interface, see the allsat() function, or call
pred_util.all_satisfy() directly.
"""

import os
import sys
import docopt
import traceback
from dataclasses import dataclass

from typing import Any, Dict, Optional, Sequence

from pred_util import (error, info, set_verbosity, set_debug, debug,
                       VERSION as PRED_UTIL_VERSION)
from pred_util.predicates import PREDICATES, PredicateError, predicate_names
from allsat.checks import (Check, CheckResult, CheckConfigError, EXAMPLES,
                           convert_values, load_checks_yaml, run_checks)

__all__ = ['Config', 'UsageError', 'allsat', 'main']

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

VERSION = "1.0.0"

PROG = 'allsat'

USAGE = ('''
{0}, version {2}

Usage:
  {0} [-D | --debug] [-s | --stack]
  {1} [-v | --verbose] -p PRED [-a ARG] [--] [VALUE ...]
  {0} [-D | --debug] [-s | --stack] [-v | --verbose] -c FILE
  {0} [-D | --debug] [-s | --stack] [-v | --verbose] (-e | --examples)
  {0} (-l | --list)
  {0} (-h | --help)
  {0} (-V | --version)

Options:
  -a ARG, --argument ARG      Argument for predicates that take one, such as
                              length_greater_than.
  -c FILE, --checks FILE      Run all the checks in a YAML checks file.
  -D, --debug                 Emit debug messages, including every predicate
                              call.
  -e, --examples              Run the built-in examples.
  -h, --help                  This message
  -l, --list                  List the available predicates.
  -p PRED, --predicate PRED   The predicate every VALUE must satisfy.
  -s, --stack                 Show stack traces on error.
  -v, --verbose               Emit verbose messages
  -V, --version               Show version and exit

VALUE is converted to the type the predicate expects (integer or string).
Use "--" before the values if any of them start with "-". With no VALUEs,
the (empty) sequence always satisfies the predicate.
'''.format(PROG, ' ' * len(PROG), VERSION))

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Config:
    """
    Configuration data. When allsat is called as a command, it parses
    the command line arguments into an instance of this class. When called
    as an API, the caller must supply one of these.

    Exactly one of `predicate`, `checks_file` and `examples` selects what
    to run.
    """
    predicate: Optional[str] = None
    argument: Optional[str] = None
    values: Sequence[str] = ()
    checks_file: Optional[str] = None
    examples: bool = False
    debug: bool = False
    verbose: bool = False
    show_stack: bool = False


class UsageError(Exception):
    def __init__(self, msg: str = ''):
        Exception.__init__(self, msg)
        self.message = msg

# -----------------------------------------------------------------------------
# Internal functions
# -----------------------------------------------------------------------------

def _parse_args(argv: Optional[Sequence[str]]) -> Dict[str, Any]:
    """
    Parse the command line parameters. docopt aborts on a usage error.

    :param argv: the arguments, or None for sys.argv[1:]

    :return: the parsed arguments
    """
    return docopt.docopt(USAGE, argv=argv, version=VERSION)


def _config_from_args(args: Dict[str, Any]) -> Config:
    return Config(predicate=args['--predicate'],
                  argument=args['--argument'],
                  values=tuple(args['VALUE']),
                  checks_file=args['--checks'],
                  examples=args['--examples'],
                  debug=args['--debug'],
                  verbose=args['--verbose'],
                  show_stack=args['--stack'])


def _command_line_check(config: Config) -> Check:
    try:
        values = convert_values(config.values, config.predicate)
    except PredicateError as e:
        raise UsageError(e.message)

    return Check(name=config.predicate,
                 values=values,
                 predicate=config.predicate,
                 argument=config.argument)


def _list_predicates() -> None:
    width = max(len(n) for n in predicate_names())
    for name in predicate_names():
        p = PREDICATES[name]
        usage = f'{name} ARG' if p.takes_argument else name
        info(f'{usage:<{width + 4}}  {p.description}')

# -----------------------------------------------------------------------------
# Public Functions
# -----------------------------------------------------------------------------

def allsat(config: Config) -> Sequence[CheckResult]:
    """
    Run the checks selected by a configuration.

    :param config: the configuration

    :return: the results, in check order
    :raises UsageError:       bad configuration or bad command-line values
    :raises CheckConfigError: bad checks file
    """
    set_verbosity(config.verbose)
    set_debug(config.debug)
    debug(f'allsat {VERSION} (pred_util {PRED_UTIL_VERSION}): {config}')

    selected = [s for s in (config.predicate, config.checks_file,
                            config.examples) if s]
    if len(selected) != 1:
        raise UsageError(
            'Specify exactly one of a predicate, a checks file, or the ' +
            'examples.'
        )

    if config.predicate:
        if config.predicate not in PREDICATES:
            names = ', '.join(predicate_names())
            raise UsageError(
                f'Unknown predicate "{config.predicate}". Valid predicates: ' +
                names
            )
        checks = (_command_line_check(config),)
    elif config.checks_file:
        if not os.path.isfile(config.checks_file):
            raise UsageError(
                f'Checks file "{config.checks_file}" does not exist.'
            )
        checks = load_checks_yaml(config.checks_file)
    else:
        checks = EXAMPLES

    try:
        return run_checks(checks)
    except PredicateError as e:
        raise UsageError(e.message)

# -----------------------------------------------------------------------------
# Main program
# -----------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None):
    show_stack = False
    try:
        args = _parse_args(argv)
        if args['--list']:
            _list_predicates()
            return

        config = _config_from_args(args)
        show_stack = config.show_stack
        results = allsat(config)
        if config.predicate:
            info(str(results[0].result))
        else:
            for r in results:
                info(f'{r.check.name}: {r.result}')
    except (UsageError, CheckConfigError) as e:
        if e.message:
            error(e.message)
        sys.exit(1)
    except Exception as e:
        if show_stack:
            tb = traceback.format_exc()
            print(tb, file=sys.stderr)
        else:
            error(str(e))
        sys.exit(1)

if __name__ == '__main__':
    main()
