from sympy import nextprime

from power_calc import PrimeRecord, calculate_powers, make_record


def test_powers_of_five():
    assert calculate_powers(5) == (25, 125, 625)
    assert make_record(5) == PrimeRecord(5, "25", "125", "625")


def test_powers_beyond_128_bits():
    p = int(nextprime(2**100))
    squared, cubed, fourth = calculate_powers(p)
    assert squared > 2**128
    assert int(squared) == p * p
    assert int(cubed) == p * p * p
    assert int(fourth) == p * p * p * p
    record = make_record(p)
    assert record.prime == p
    assert record.to_fourth_power == str(p**4)


def test_not_representable():
    assert calculate_powers(2.5) is None
    assert calculate_powers("7") is None
    assert calculate_powers(None) is None
    assert make_record(7.0) is None


def test_record_row_and_dict():
    record = make_record(3)
    assert record.as_row() == ["3", "9", "27", "81"]
    assert record.as_dict() == {"prime": 3, "squared": "9", "cubed": "27", "to_fourth_power": "81"}
