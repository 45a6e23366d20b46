# tests/test_model.py
"""
Tests for the response model: Factor, NumberStatus, FactorizationResult.

Run: pytest -v
"""

from __future__ import annotations

import json
from math import prod

import pytest

from factordb import Factor, FactorizationResult, NumberStatus, ParseError

# ---------- helpers -----------------------------------------------------------

FORTY_TWO_PAYLOAD = {"id": "42", "status": "FF", "factors": [["2", 1], ["3", 1], ["7", 1]]}


def _result(pairs, status="FF", number=None):
    payload = {"id": "1", "status": status, "factors": [[str(v), e] for v, e in pairs]}
    if number is None:
        number = str(prod(v ** e for v, e in pairs))
    return FactorizationResult.from_json(payload, number=number)


# ---------- Factor ------------------------------------------------------------


def test_factor_iter_repeats_base():
    a_million = Factor(10, 6)
    assert list(a_million) == [10] * 6
    assert prod(a_million) == 1_000_000
    assert a_million.power() == 1_000_000
    assert str(Factor(2, 3)) == "2 2 2"


def test_factor_zero_exponent_is_empty():
    assert list(Factor(5, 0)) == []


def test_factor_from_pair_accepts_api_shapes():
    assert Factor.from_pair(["2", 1]) == Factor(2, 1)
    assert Factor.from_pair(["3", "4"]) == Factor(3, 4)  # exponent sent as string
    assert Factor.from_pair([7, 2]) == Factor(7, 2)      # value sent as number


@pytest.mark.parametrize("pair", [
    ["2"],
    ["2", 1, 1],
    "2^1",
    ["two", 1],
    ["2", -1],
    ["2", True],
    ["2", 1.5],
    [None, 1],
    ["-3", 1],
])
def test_factor_from_pair_rejects(pair):
    with pytest.raises((TypeError, ValueError)):
        Factor.from_pair(pair)


# ---------- NumberStatus ------------------------------------------------------

STATUS_CODES = [
    ("C", NumberStatus.NO_FACTORS_KNOWN),
    ("CF", NumberStatus.FACTORS_KNOWN),
    ("FF", NumberStatus.FULLY_FACTORED),
    ("P", NumberStatus.DEFINITELY_PRIME),
    ("PRP", NumberStatus.PROBABLY_PRIME),
    ("Prp", NumberStatus.PROBABLY_PRIME),
    ("U", NumberStatus.UNKNOWN),
    ("Unit", NumberStatus.UNIT),
    ("Zero", NumberStatus.ZERO),
    ("N", NumberStatus.NOT_IN_DATABASE),
]


@pytest.mark.parametrize(("code", "expected"), STATUS_CODES)
def test_status_codes(code, expected):
    assert NumberStatus.parse(code) is expected
    assert expected.description


@pytest.mark.parametrize("code", ["XX", "ff", "", "prime", None, 3])
def test_unknown_status_is_a_parse_error(code):
    payload = {"id": "6", "status": code, "factors": [["2", 1], ["3", 1]]}
    with pytest.raises(ParseError):
        FactorizationResult.from_json(payload)


# ---------- derived views -----------------------------------------------------


@pytest.mark.parametrize(("pairs", "flat"), [
    ([(2, 1), (3, 1), (7, 1)], [2, 3, 7]),
    ([(2, 3)], [2, 2, 2]),
    ([(2, 2), (5, 2)], [2, 2, 5, 5]),
])
def test_factors_flattened(pairs, flat):
    assert _result(pairs).factors_flattened() == flat


def test_factors_flattened_empty():
    res = FactorizationResult.from_json({"id": "1", "status": "Unit", "factors": []})
    assert res.factors_flattened() == []
    assert res.unique_factors() == []
    assert res.product() == 1


def test_flattened_keeps_api_order():
    # the API normally sends ascending bases; the views must not reorder anyway
    res = _result([(7, 1), (2, 2), (3, 1)])
    assert res.factors_flattened() == [7, 2, 2, 3]
    assert res.unique_factors() == [7, 2, 3]


def test_unique_factors_first_occurrence_no_duplicates():
    payload = {"id": "1", "status": "CF", "factors": [["5", 1], ["3", 2], ["5", 1], ["2", 1]]}
    res = FactorizationResult.from_json(payload, number="450")
    uniq = res.unique_factors()
    assert uniq == [5, 3, 2]
    assert len(uniq) == len(set(uniq))
    assert set(uniq) == {f.value for f in res.factors}


def test_views_do_not_mutate():
    res = _result([(2, 3), (3, 1)])
    before = res.factors
    res.factors_flattened().append(99)
    res.unique_factors().clear()
    assert res.factors == before
    assert res.factors_flattened() == [2, 2, 2, 3]


def test_result_is_immutable():
    res = _result([(2, 1)])
    with pytest.raises(AttributeError):
        res.status = NumberStatus.UNKNOWN  # type: ignore[misc]


# ---------- parsing -----------------------------------------------------------


def test_forty_two():
    res = FactorizationResult.from_text(json.dumps(
        {"id": "42", "status": "FF", "factors": [["2", 1], ["3", 1], ["7", 1]]}
    ))
    assert res.id == 42
    assert res.status is NumberStatus.FULLY_FACTORED
    assert res.number == "42"
    assert res.original_number == 42
    assert res.factors_flattened() == [2, 3, 7]
    assert res.unique_factors() == [2, 3, 7]
    assert res.verify()
    assert str(res) == "2 3 7"


def test_big_number_round_trip():
    p = 2 ** 127 - 1                           # 39 digits
    q = 1_000_000_007
    n = p * q
    n_str = str(n)
    assert len(n_str) >= 40
    payload = {"id": 1100000000012345678, "status": "FF", "factors": [[str(q), 1], [str(p), 1]]}
    res = FactorizationResult.from_json(payload, number=n_str)
    assert res.original_number == n
    assert str(res.original_number) == n_str
    assert res.factors_flattened() == [q, p]
    assert prod(res.factors_flattened()) == res.original_number
    assert res.verify()


def test_number_from_payload_key_or_id():
    assert FactorizationResult.from_json({"id": 15, "status": "FF", "factors": [["3", 1], ["5", 1]]}).number == "15"
    res = FactorizationResult.from_json(
        {"id": "1100000000000000001", "number": "15", "status": "FF", "factors": [["3", 1], ["5", 1]]}
    )
    assert res.number == "15"
    assert res.id == 1100000000000000001


def test_number_argument_is_normalized():
    res = FactorizationResult.from_json(FORTY_TWO_PAYLOAD, number="0042")
    assert res.number == "42"


@pytest.mark.parametrize("text", [
    '{"id": "42", "status": "FF", "factors": [["2", 1], ["3"',   # truncated
    "",
    "<html>Too many requests</html>",
    b"\xff\xfe\x00",
])
def test_malformed_json_is_a_parse_error(text):
    with pytest.raises(ParseError) as ei:
        FactorizationResult.from_text(text, number="42")
    assert ei.value.cause is not None


@pytest.mark.parametrize("payload", [
    {"status": "FF", "factors": []},
    {"id": "42", "factors": []},
    {"id": "42", "status": "FF"},
    {"id": "42", "status": "FF", "factors": "2 3 7"},
    {"id": "42", "status": "FF", "factors": [["2", 1], ["x", 1]]},
    {"id": "4x2", "status": "FF", "factors": []},
    {"id": True, "status": "FF", "factors": []},
    ["42", "FF"],
    None,
])
def test_bad_payload_is_a_parse_error(payload):
    with pytest.raises(ParseError):
        FactorizationResult.from_json(payload, number="42")


@pytest.mark.parametrize("number", ["abc", "-5", "4.2", ""])
def test_bad_number_is_a_parse_error(number):
    with pytest.raises(ParseError):
        FactorizationResult.from_json(FORTY_TWO_PAYLOAD, number=number)


def test_original_number_past_digit_guard_is_a_parse_error(default_digit_limit):
    res = FactorizationResult.from_json({"id": "1", "status": "C", "factors": []}, number="9" * 5000)
    assert res.number == "9" * 5000
    with pytest.raises(ParseError, match="MAX_DIGITS"):
        _ = res.original_number


# ---------- status helpers and verify() ---------------------------------------


def test_prime_helpers():
    p = FactorizationResult.from_json({"id": "17", "status": "P", "factors": [["17", 1]]})
    prp = FactorizationResult.from_json({"id": "1", "status": "PRP", "factors": [["97", 1]]}, number="97")
    cf = FactorizationResult.from_json({"id": "1", "status": "CF", "factors": [["2", 1]]}, number="2000000000000000000014")
    assert p.is_prime() and p.is_definitely_prime()
    assert prp.is_prime() and not prp.is_definitely_prime()
    assert not cf.is_prime()
    assert p.factors_flattened() == p.unique_factors() == [17]


def test_verify_partial_and_wrong():
    partial = FactorizationResult.from_json({"id": "1", "status": "CF", "factors": [["2", 1]]}, number="10")
    assert not partial.is_fully_factored()
    assert not partial.verify()
    wrong = FactorizationResult.from_json({"id": "1", "status": "FF", "factors": [["2", 1]]}, number="10")
    assert not wrong.verify()


def test_verify_zero_and_one():
    zero = FactorizationResult.from_json({"id": "0", "status": "Zero", "factors": []})
    one = FactorizationResult.from_json({"id": "1", "status": "Unit", "factors": [["1", 1]]})
    assert zero.verify() and one.verify()


def test_to_json_matches_api_shape():
    res = FactorizationResult.from_json(FORTY_TWO_PAYLOAD)
    assert res.to_json() == FORTY_TWO_PAYLOAD
    assert FactorizationResult.from_json(res.to_json()) == res
