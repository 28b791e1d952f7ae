import pytest

from minishell.textutils import atoi, is_alnum, split_fields


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("  \t42", 42),
        ("-7", -7),
        ("+13", 13),
        ("12abc", 12),
        ("", 0),
        ("abc", 0),
    ],
)
def test_atoi_values(text, expected):
    assert atoi(text) == expected


def test_atoi_rejects_multiple_signs():
    assert atoi("+-5") == 0
    assert atoi("--5") == 0


def test_atoi_wraps_to_signed_32_bit():
    assert atoi("2147483648") == -2147483648
    assert atoi("4294967296") == atoi("0")


def test_atoi_negative_is_mirror_of_positive():
    for text in ("1", "99", "123456"):
        assert atoi("-" + text) == -atoi(text)


def test_split_fields_drops_empty():
    assert split_fields("::a::b:", ":") == ["a", "b"]


def test_split_fields_only_separators():
    assert split_fields(":::", ":") == []


def test_split_fields_round_trip():
    parts = ["/usr/bin", "/bin", "/usr/local/bin"]
    assert split_fields(":".join(parts), ":") == parts


def test_split_fields_on_equal_sign():
    assert split_fields("NAME=value", "=") == ["NAME", "value"]
    assert split_fields("NAME=", "=") == ["NAME"]


@pytest.mark.parametrize("ch", ["a", "Z", "0", "9"])
def test_is_alnum_true(ch):
    assert is_alnum(ch) is True


@pytest.mark.parametrize("ch", ["?", "_", " ", "", "é", "ab"])
def test_is_alnum_false(ch):
    assert is_alnum(ch) is False