from pred_util.predicates import (PREDICATES, PredicateError, convert_value,
                                  divisible_by, is_even, is_nonempty, is_odd,
                                  length_greater_than, length_less_than,
                                  lookup_predicate, predicate_names,
                                  predicate_value_type, starts_with)
import pytest


def test_plain_predicates():
    assert is_even(4) == True
    assert is_even(1) == False
    assert is_even(0) == True
    assert is_odd(-3) == True
    assert is_nonempty('x') == True
    assert is_nonempty('') == False


def test_factories():
    p = length_greater_than(3)
    assert p('Alice') == True
    assert p('Bob') == False
    assert length_less_than(4)('Eva') == True
    assert divisible_by(3)(9) == True
    assert divisible_by(3)(10) == False
    assert starts_with('Ch')('Charlie') == True
    assert starts_with('Ch')('David') == False


def test_divisible_by_zero():
    with pytest.raises(PredicateError):
        divisible_by(0)


def test_predicate_type_errors_propagate():
    with pytest.raises(TypeError):
        length_greater_than(3)(42)


def test_lookup_predicate():
    assert lookup_predicate('is_even') is is_even
    assert lookup_predicate('length_greater_than', '3')('Alice') == True
    assert lookup_predicate('length_greater_than', 3)('Bob') == False
    assert lookup_predicate('greater_than', '-1')(0) == True
    assert lookup_predicate('starts_with', 'A')('Alice') == True


def test_lookup_predicate_errors():
    with pytest.raises(PredicateError) as e:
        lookup_predicate('is_prime')
    assert 'Unknown predicate "is_prime"' in e.value.message

    with pytest.raises(PredicateError) as e:
        lookup_predicate('length_greater_than')
    assert 'requires an argument' in e.value.message

    with pytest.raises(PredicateError) as e:
        lookup_predicate('is_even', '2')
    assert 'does not take an argument' in e.value.message

    with pytest.raises(PredicateError) as e:
        lookup_predicate('length_greater_than', 'three')
    assert 'Bad argument "three"' in e.value.message


def test_registry():
    assert predicate_names() == tuple(sorted(PREDICATES.keys()))
    assert 'is_even' in predicate_names()
    assert predicate_value_type('is_even') is int
    assert predicate_value_type('length_greater_than') is str
    assert PREDICATES['length_greater_than'].takes_argument == True
    assert PREDICATES['is_even'].takes_argument == False
    with pytest.raises(PredicateError):
        predicate_value_type('nope')


def test_convert_value():
    assert convert_value('42', int) == 42
    assert convert_value(-7, int) == -7
    assert convert_value(42, str) == '42'
    for bad in (2.5, 3.0, True, False, None, '2.5', 'two'):
        with pytest.raises(ValueError):
            convert_value(bad, int)


def test_lookup_predicate_rejects_float_and_bool_arguments():
    with pytest.raises(PredicateError) as e:
        lookup_predicate('length_greater_than', 3.9)
    assert 'Bad argument "3.9"' in e.value.message
    with pytest.raises(PredicateError):
        lookup_predicate('greater_than', True)
