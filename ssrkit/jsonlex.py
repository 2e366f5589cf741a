"""Character- and number-level scanning used by the JSON parser."""

from __future__ import annotations

_DIGITS = frozenset("0123456789")
_HEX_LETTERS = {
    "a": 0x0A, "b": 0x0B, "c": 0x0C, "d": 0x0D, "e": 0x0E, "f": 0x0F,
    "A": 0x0A, "B": 0x0B, "C": 0x0C, "D": 0x0D, "E": 0x0E, "F": 0x0F,
}
_SIGNS = frozenset("+-")
_EXPONENT = frozenset("eE")


class JsonParseError(ValueError):
    """Raised when JSON text cannot be parsed; carries the position."""

    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"


def hex_value(char: str | int) -> int | None:
    """Return the value of one hexadecimal digit, or None if it is not one."""
    if isinstance(char, int):
        if not 0 <= char <= 0x7F:
            return None
        char = chr(char)
    if char in _DIGITS:
        return ord(char) - ord("0")
    return _HEX_LETTERS.get(char)


def encode_unicode_escape(code: int) -> bytes:
    """Encode the code unit of a ``\\uXXXX`` escape as UTF-8.

    Surrogate halves are encoded on their own, three bytes each.
    """
    if not 0 <= code <= 0xFFFF:
        raise ValueError(f"code unit out of range: {code:#x}")
    return chr(code).encode("utf-8", "surrogatepass")


def _pow10(exponent: int) -> float:
    try:
        return 10.0 ** exponent
    except OverflowError:
        return float("inf")


def scan_number(text: str | bytes, pos: int, line: int = 1,
                column: int = 0) -> tuple[int | float, int]:
    """Scan a JSON number starting at *pos*.

    Returns the value (an int, or a float when there is a fraction or an
    exponent) and the index of the first character after the number.
    *line* and *column* give the position of ``text[pos]`` for error
    reports. Raises JsonParseError on a malformed number.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    start = pos
    end = len(text)

    def fail(message: str, at: int) -> JsonParseError:
        return JsonParseError(message, line, column + at - start)

    first = text[pos] if pos < end else ""
    if first != "-" and first not in _DIGITS:
        shown = first or "EOF"
        raise fail(f"Unexpected {shown} when seeking value", pos)

    i = pos
    negative = first == "-"
    if negative:
        i += 1

    integer = 0
    dbl = 0.0
    is_double = False
    num_digits = 0
    leading_zero = False
    in_exponent = False
    exponent_sign_seen = False
    exponent_negative = False
    exponent = 0
    fraction = 0

    while True:
        b = text[i] if i < end else ""

        if b in _DIGITS:
            digit = ord(b) - ord("0")
            num_digits += 1
            if in_exponent:
                exponent_sign_seen = True
                exponent = exponent * 10 + digit
            elif not is_double:
                if leading_zero:
                    raise fail(f"Unexpected `0` before `{b}`", i)
                if num_digits == 1 and b == "0":
                    leading_zero = True
                integer = integer * 10 + digit
            else:
                fraction = fraction * 10 + digit
            i += 1
            continue

        if b in _SIGNS:
            if in_exponent and not exponent_sign_seen:
                exponent_sign_seen = True
                exponent_negative = b == "-"
                i += 1
                continue
        elif b == "." and not is_double:
            if not num_digits:
                raise fail("Expected digit before `.`", i)
            is_double = True
            dbl = float(integer)
            num_digits = 0
            i += 1
            continue

        if not in_exponent:
            if is_double:
                if not num_digits:
                    raise fail("Expected digit after `.`", i)
                dbl += fraction / _pow10(num_digits)
            if b in _EXPONENT:
                in_exponent = True
                if not is_double:
                    is_double = True
                    dbl = float(integer)
                num_digits = 0
                leading_zero = False
                i += 1
                continue
        else:
            if not num_digits:
                raise fail("Expected digit after `e`", i)
            dbl *= _pow10(-exponent if exponent_negative else exponent)
        break

    if is_double:
        return (-dbl if negative else dbl), i
    return (-integer if negative else integer), i