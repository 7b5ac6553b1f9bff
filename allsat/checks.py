"""
Checks: named sequences of values, each tested against a named predicate.
Checks come from the built-in examples, from the command line, or from a
YAML checks file:

    checks:
      - name: all even
        predicate: is_even
        values: [2, 4, 6, 8]
      - name: long names
        predicate: length_greater_than
        argument: 3
        values: [Alice, Charlie, David]
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import yaml

from pred_util import all_satisfy, debug, verbose
from pred_util.predicates import (convert_value, lookup_predicate,
                                  predicate_value_type, PredicateError)

__all__ = ['Check', 'CheckResult', 'CheckConfigError', 'EXAMPLES',
           'load_checks_yaml', 'parse_checks', 'run_check', 'run_checks',
           'convert_values']

# -----------------------------------------------------------------------------
# Classes
# -----------------------------------------------------------------------------

class CheckConfigError(Exception):
    def __init__(self, msg: str = ''):
        Exception.__init__(self, msg)
        self.message = msg


@dataclass(frozen=True)
class Check:
    name: str
    values: Sequence[Any]
    predicate: str
    argument: Optional[Any] = None


@dataclass(frozen=True)
class CheckResult:
    """
    The outcome of a check. `evaluated` is the number of times the predicate
    was called, which is less than the number of values when the check
    stopped at a failing element.
    """
    check: Check
    result: bool
    evaluated: int

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------

EXAMPLES = (
    Check(name='all numbers even',
          values=(1, 2, 3, 4, 5),
          predicate='is_even'),
    Check(name='all names longer than three',
          values=('Alice', 'Bob', 'Charlie', 'David', 'Eva'),
          predicate='length_greater_than',
          argument=3),
)

_CHECK_FIELDS = {'name', 'values', 'predicate', 'argument'}

# -----------------------------------------------------------------------------
# Public Functions
# -----------------------------------------------------------------------------

def convert_values(values: Sequence[Any], predicate: str) -> Sequence[Any]:
    """
    Convert raw values (strings from the command line, or whatever YAML
    produced) to the element type the named predicate expects.

    :param values:    the raw values
    :param predicate: the predicate name

    :return: the converted values, as a tuple
    :raises PredicateError: unknown predicate, or a value that can't be
                            converted
    """
    value_type = predicate_value_type(predicate)
    converted = []
    for v in values:
        try:
            converted.append(convert_value(v, value_type))
        except (TypeError, ValueError):
            raise PredicateError(
                f'Bad value "{v}" for predicate "{predicate}": expected ' +
                f'{value_type.__name__}.'
            )
    return tuple(converted)


def parse_checks(contents: Any, where: str) -> Sequence[Check]:
    """
    Convert the parsed contents of a checks file into Check objects,
    validating as we go.

    :param contents: the parsed YAML
    :param where:    the source of the contents, for error messages

    :return: the checks, in file order
    :raises CheckConfigError: on any validation error
    """
    def required(d: Dict[str, Any], key: str, section: str) -> Any:
        v = d.get(key)
        if v is None:
            raise CheckConfigError(
                f'"{where}": Missing required "{key}" in {section}.'
            )
        return v

    if not isinstance(contents, dict):
        raise CheckConfigError(f'"{where}": Expected a "checks" section.')

    checks_cfg = required(contents, 'checks', 'top level')
    if not isinstance(checks_cfg, list):
        raise CheckConfigError(f'"{where}": "checks" must be a list.')

    checks = []
    for i, cfg in enumerate(checks_cfg, start=1):
        section = f'check #{i}'
        if not isinstance(cfg, dict):
            raise CheckConfigError(f'"{where}": {section} is not a mapping.')

        bad_keys = set(cfg.keys()) - _CHECK_FIELDS
        if bad_keys:
            keys = ', '.join(sorted(str(k) for k in bad_keys))
            raise CheckConfigError(
                f'"{where}": Bad fields in {section}: {keys}'
            )

        name = str(cfg.get('name') or section)
        predicate = required(cfg, 'predicate', section)
        if not isinstance(predicate, str):
            raise CheckConfigError(
                f'"{where}": "predicate" in {section} must be a name.'
            )
        values = cfg.get('values', [])
        if values is None:
            values = []
        if not isinstance(values, list):
            raise CheckConfigError(
                f'"{where}": "values" in {section} must be a list.'
            )

        argument = cfg.get('argument')
        try:
            # Validate now, so errors point at the file, not at run time.
            lookup_predicate(predicate, argument)
            values = convert_values(values, predicate)
        except PredicateError as e:
            raise CheckConfigError(f'"{where}": {section}: {e.message}')

        checks.append(Check(name=name,
                            values=values,
                            predicate=predicate,
                            argument=argument))

    return tuple(checks)


def load_checks_yaml(yaml_file: str) -> Sequence[Check]:
    """
    Load and validate a YAML checks file.

    :param yaml_file: path to the file

    :return: the checks
    :raises CheckConfigError: if the file can't be parsed or is invalid
    """
    verbose(f"Loading {yaml_file}...")
    try:
        with open(yaml_file, 'r') as y:
            contents = yaml.safe_load(y)
    except yaml.YAMLError as e:
        raise CheckConfigError(f'"{yaml_file}": {e}')

    return parse_checks(contents, yaml_file)


def run_check(check: Check) -> CheckResult:
    """
    Run one check. Each predicate call is reported as a debug message.

    :param check: the check

    :return: the result
    """
    predicate = lookup_predicate(check.predicate, check.argument)
    calls = 0

    def traced(value: Any) -> bool:
        nonlocal calls
        calls += 1
        res = predicate(value)
        debug(f'{check.predicate}({value!r}) -> {res}')
        return res

    result = all_satisfy(check.values, traced)
    verbose(f'"{check.name}": {calls} of {len(check.values)} values tested.')
    return CheckResult(check=check, result=result, evaluated=calls)


def run_checks(checks: Sequence[Check]) -> Sequence[CheckResult]:
    return tuple(run_check(c) for c in checks)
