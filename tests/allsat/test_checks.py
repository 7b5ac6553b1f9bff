from allsat.checks import (Check, CheckConfigError, EXAMPLES,
                           convert_values, load_checks_yaml, parse_checks,
                           run_check, run_checks)
from pred_util import set_debug, set_verbosity
from pred_util.predicates import PredicateError
import pytest


def write(tmp_path, text):
    p = tmp_path / 'checks.yaml'
    p.write_text(text)
    return str(p)


def test_examples():
    results = run_checks(EXAMPLES)
    assert [r.result for r in results] == [False, False]
    # is_even fails on 1; length_greater_than(3) fails on "Bob".
    assert [r.evaluated for r in results] == [1, 2]


def test_run_check():
    r = run_check(Check(name='evens', values=(2, 4, 6, 8), predicate='is_even'))
    assert r.result == True
    assert r.evaluated == 4

    r = run_check(Check(name='names',
                        values=('Alice', 'Charlie', 'David'),
                        predicate='length_greater_than',
                        argument=3))
    assert r.result == True
    assert r.evaluated == 3

    r = run_check(Check(name='empty', values=(), predicate='is_odd'))
    assert r.result == True
    assert r.evaluated == 0


def test_run_check_predicate_error_propagates():
    with pytest.raises(TypeError):
        run_check(Check(name='bad', values=('a',), predicate='is_even'))


def test_run_check_debug(capsys):
    set_debug(True)
    try:
        run_check(Check(name='evens', values=(2, 3, 4), predicate='is_even'))
    finally:
        set_debug(False)
    out = capsys.readouterr().out
    assert '(DEBUG) is_even(2) -> True' in out
    assert '(DEBUG) is_even(3) -> False' in out
    assert 'is_even(4)' not in out


def test_run_check_verbose(capsys):
    set_verbosity(True)
    try:
        run_check(Check(name='evens', values=(2, 3, 4), predicate='is_even'))
    finally:
        set_verbosity(False)
    assert '"evens": 2 of 3 values tested.' in capsys.readouterr().out


def test_convert_values():
    assert convert_values(['1', '-2', 3], 'is_even') == (1, -2, 3)
    assert convert_values(['Alice', 42], 'length_greater_than') == ('Alice', '42')
    with pytest.raises(PredicateError):
        convert_values(['x'], 'is_even')


def test_load_checks_yaml(tmp_path):
    path = write(tmp_path, '''
checks:
  - name: all even
    predicate: is_even
    values: [2, 4, 6, 8]
  - name: long names
    predicate: length_greater_than
    argument: 3
    values: [Alice, Bob, Charlie]
  - predicate: is_odd
''')
    checks = load_checks_yaml(path)
    assert len(checks) == 3
    assert checks[0] == Check(name='all even', values=(2, 4, 6, 8),
                              predicate='is_even')
    assert checks[1].argument == 3
    assert checks[1].values == ('Alice', 'Bob', 'Charlie')
    assert checks[2].name == 'check #3'
    assert checks[2].values == ()

    assert [r.result for r in run_checks(checks)] == [True, False, True]


def test_parse_checks_errors():
    def check_error(contents, expected):
        with pytest.raises(CheckConfigError) as e:
            parse_checks(contents, 'x.yaml')
        assert expected in e.value.message

    check_error(None, 'Expected a "checks" section')
    check_error({}, 'Missing required "checks"')
    check_error({'checks': 'nope'}, '"checks" must be a list')
    check_error({'checks': ['nope']}, 'check #1 is not a mapping')
    check_error({'checks': [{'values': [1]}]},
                'Missing required "predicate" in check #1')
    check_error({'checks': [{'predicate': 'is_even', 'foo': 1}]},
                'Bad fields in check #1: foo')
    check_error({'checks': [{'predicate': 'is_even', 'values': 2}]},
                '"values" in check #1 must be a list')
    check_error({'checks': [{'predicate': 'is_prime', 'values': [2]}]},
                'Unknown predicate "is_prime"')
    check_error({'checks': [{'predicate': 'is_even', 'values': ['a']}]},
                'Bad value "a"')
    check_error({'checks': [{'predicate': 'length_greater_than',
                             'values': ['a']}]},
                'requires an argument')


def test_load_checks_yaml_syntax_error(tmp_path):
    path = write(tmp_path, 'checks: [\n')
    with pytest.raises(CheckConfigError):
        load_checks_yaml(path)


def test_parse_checks_rejects_non_integer_values():
    def check_error(cfg, expected):
        with pytest.raises(CheckConfigError) as e:
            parse_checks({'checks': [cfg]}, 'x.yaml')
        assert expected in e.value.message

    check_error({'predicate': 'is_even', 'values': [2.5, 4.9]},
                'Bad value "2.5"')
    check_error({'predicate': 'is_even', 'values': [2, True]},
                'Bad value "True"')
    check_error({'predicate': 'length_greater_than', 'argument': 3.9,
                 'values': ['Alice']},
                'Bad argument "3.9"')
    check_error({'predicate': 'divisible_by', 'argument': False,
                 'values': [2]},
                'Bad argument "False"')


def test_load_checks_yaml_float_values(tmp_path):
    path = write(tmp_path, '''
checks:
  - predicate: is_even
    values: [2.5, 4.9]
''')
    with pytest.raises(CheckConfigError) as e:
        load_checks_yaml(path)
    assert 'check #1: Bad value "2.5"' in e.value.message


def test_parse_checks_predicate_must_be_a_name():
    with pytest.raises(CheckConfigError) as e:
        parse_checks({'checks': [{'predicate': ['is_even'], 'values': [2]}]},
                     'x.yaml')
    assert '"predicate" in check #1 must be a name' in e.value.message

    with pytest.raises(CheckConfigError):
        parse_checks({'checks': [{'predicate': {'is_even': 1}}]}, 'x.yaml')
