import pytest

from ssrkit.jsonlex import (
    JsonParseError,
    encode_unicode_escape,
    hex_value,
    scan_number,
)


@pytest.mark.parametrize("char,expected", [
    ("0", 0), ("9", 9), ("a", 10), ("A", 10), ("f", 15), ("F", 15), ("c", 12),
])
def test_hex_value_digits(char, expected):
    assert hex_value(char) == expected


@pytest.mark.parametrize("char", ["g", "G", " ", "-", "x"])
def test_hex_value_rejects_non_hex(char):
    assert hex_value(char) is None


def test_hex_value_accepts_byte_values():
    assert hex_value(ord("b")) == 11
    assert hex_value(0xC3) is None


@pytest.mark.parametrize("code", [0x41, 0x7F, 0xE9, 0x7FF, 0x800, 0x4E2D, 0xFFFF])
def test_encode_unicode_escape_matches_utf8(code):
    assert encode_unicode_escape(code) == chr(code).encode("utf-8")


def test_encode_unicode_escape_lengths():
    assert len(encode_unicode_escape(0x7F)) == 1
    assert len(encode_unicode_escape(0x80)) == 2
    assert len(encode_unicode_escape(0x800)) == 3


def test_encode_unicode_escape_surrogate_half():
    encoded = encode_unicode_escape(0xD800)
    assert len(encoded) == 3
    assert encoded[0] == 0xED


def test_encode_unicode_escape_out_of_range():
    with pytest.raises(ValueError):
        encode_unicode_escape(0x10000)


def test_scan_integer():
    assert scan_number("123,", 0) == (123, 3)


def test_scan_negative_integer():
    value, end = scan_number("[-45]", 1)
    assert value == -45
    assert end == 4


def test_scan_zero():
    assert scan_number("0", 0) == (0, 1)


def test_scan_fraction():
    value, end = scan_number("1.5", 0)
    assert value == pytest.approx(1.5)
    assert isinstance(value, float)
    assert end == 3


def test_scan_exponent_makes_double():
    value, end = scan_number("2e3}", 0)
    assert value == pytest.approx(2000.0)
    assert isinstance(value, float)
    assert end == 3


def test_scan_negative_exponent_with_fraction():
    value, end = scan_number("1.25e-2 ", 0)
    assert value == pytest.approx(0.0125)
    assert end == 7


def test_scan_exponent_with_plus_sign():
    value, _ = scan_number("3E+2", 0)
    assert value == pytest.approx(300.0)


def test_scan_negative_double():
    value, _ = scan_number("-0.5", 0)
    assert value == pytest.approx(-0.5)


def test_scan_stops_at_second_dot():
    value, end = scan_number("1.2.3", 0)
    assert value == pytest.approx(1.2)
    assert end == 3


def test_scan_bytes_input():
    assert scan_number(b"  42 ", 2) == (42, 4)


def test_lone_minus_reads_as_zero():
    assert scan_number("-]", 0) == (0, 1)


def test_leading_zero_rejected():
    with pytest.raises(JsonParseError, match="Unexpected `0` before `1`"):
        scan_number("01", 0)


def test_missing_fraction_digits_rejected():
    with pytest.raises(JsonParseError, match="Expected digit after `.`"):
        scan_number("1.", 0)


def test_missing_fraction_before_exponent_rejected():
    with pytest.raises(JsonParseError, match="Expected digit after `.`"):
        scan_number("1.e5", 0)


def test_missing_exponent_digits_rejected():
    with pytest.raises(JsonParseError, match="Expected digit after `e`"):
        scan_number("1e", 0)
    with pytest.raises(JsonParseError, match="Expected digit after `e`"):
        scan_number("1e+", 0)


def test_dot_without_digits_rejected():
    with pytest.raises(JsonParseError, match="Expected digit before `.`"):
        scan_number("-.5", 0)


def test_non_number_start_rejected():
    with pytest.raises(JsonParseError):
        scan_number("x", 0)


def test_error_position_is_reported():
    with pytest.raises(JsonParseError) as info:
        scan_number("  01", 2, 3, 5)
    assert info.value.line == 3
    assert info.value.column == 6


def test_parse_error_str_includes_position():
    error = JsonParseError("Unknown value", 2, 7)
    assert str(error) == "2:7: Unknown value"
    assert error.message == "Unknown value"