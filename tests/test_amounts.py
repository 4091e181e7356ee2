import pytest

from i2e.extraction.amounts import is_amount_token, parse_amount


@pytest.mark.parametrize(
    "token, expected",
    [
        ("1.234,56", 1234.56),
        ("1.234,56-", -1234.56),
        ("1234,56", 1234.56),
        ("1234,56-", -1234.56),
        ("-50,00", -50.0),
        ("- 1.234,56", -1234.56),
        ("1,234.56", 1234.56),
        ("50", 50.0),
        ("1.234.567", 1234567.0),
        ("1,234,567", 1234.567),
        (" 950,00 ", 950.0),
    ],
)
def test_parse_amount(token, expected):
    assert parse_amount(token) == expected


@pytest.mark.parametrize("token", [None, "", "-", "abc", ".,", "12a", "-12-", "--5"])
def test_parse_amount_failure_sentinel(token):
    assert parse_amount(token) is None


def test_is_amount_token():
    assert is_amount_token("1.000,00")
    assert is_amount_token("950,00-")
    assert not is_amount_token("PU")
    assert not is_amount_token("21%(V1)")
    assert not is_amount_token(".")
