"""A JSON parser that builds JsonValue trees, with optional comments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .jsonlex import JsonParseError, encode_unicode_escape, hex_value, scan_number
from .jsonvalue import JsonType, JsonValue

_BOM = b"\xef\xbb\xbf"
_WHITESPACE = frozenset(" \t\r\n")
_NUMBER_START = frozenset("-0123456789")
_PLAIN_RUN = re.compile(r'[^"\\]+')
_LINE_END = re.compile(r"[\r\n]")
_SIMPLE_ESCAPES = {"b": b"\b", "f": b"\f", "n": b"\n", "r": b"\r", "t": b"\t"}
_LITERALS = {
    "t": ("true", JsonType.BOOLEAN, True),
    "f": ("false", JsonType.BOOLEAN, False),
    "n": ("null", JsonType.NULL, None),
}

# Sizes used for the memory budget: one value node, one array slot and one
# object member slot.
_VALUE_SIZE = 40
_SLOT_SIZE = 8
_MEMBER_SIZE = 24

_ALLOC_FAILURE = "Memory allocation failure"


@dataclass(frozen=True)
class JsonSettings:
    """Parser options.

    *max_memory* caps the bytes the parsed tree may take (0 means no cap);
    *enable_comments* allows ``//`` and ``/* */`` comments between tokens.
    """

    max_memory: int = 0
    enable_comments: bool = False


class _State(Enum):
    SEEK = "seek"
    OBJECT = "object"
    DONE = "done"


def _show(char: str) -> str:
    return char if char else "EOF"


class _Parser:
    def __init__(self, text: str, settings: JsonSettings) -> None:
        self.text = text
        self.end = len(text)
        self.pos = 0
        self.line = 1
        self.line_begin = 0
        self.settings = settings
        self.used = 0
        self.payload = 0
        self.stack: list[JsonValue] = []
        self.keys: list[str | None] = []
        self.root: JsonValue | None = None
        self.state = _State.SEEK
        self.need_comma = False
        self.need_colon = False

    def error(self, message: str, pos: int | None = None) -> JsonParseError:
        at = self.pos if pos is None else pos
        return JsonParseError(message, self.line, at - self.line_begin)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < self.end else ""

    def skip_whitespace(self, char: str) -> None:
        if char == "\n":
            self.line += 1
            self.line_begin = self.pos
        self.pos += 1

    def new_value(self, jtype: JsonType, value) -> JsonValue:
        limit = self.settings.max_memory
        self.used += _VALUE_SIZE
        if limit and self.used > limit:
            raise JsonParseError(_ALLOC_FAILURE)
        parent = self.stack[-1] if self.stack else None
        node = JsonValue(jtype, value, parent)
        if self.root is None:
            self.root = node
        return node

    def run(self) -> JsonValue:
        comments = self.settings.enable_comments
        while True:
            char = self.peek()
            if comments and char == "/":
                self.skip_comment()
                continue
            if self.state is _State.DONE:
                if not char:
                    break
                if char in _WHITESPACE:
                    self.skip_whitespace(char)
                    continue
                raise self.error(f"Trailing garbage: `{char}`")
            if self.state is _State.OBJECT:
                self.in_object(char)
            else:
                self.in_seek(char)

        limit = self.settings.max_memory
        if limit and self.used + self.payload > limit:
            raise JsonParseError(_ALLOC_FAILURE)
        assert self.root is not None
        return self.root

    def finish(self, value: JsonValue) -> None:
        self.need_comma = True
        if not self.stack:
            self.state = _State.DONE
            return
        parent = self.stack[-1]
        if parent.type is JsonType.ARRAY:
            parent.value.append(value)
            self.state = _State.SEEK
        else:
            parent.value.append((self.keys[-1], value))
            self.state = _State.OBJECT

    def close(self) -> None:
        self.pos += 1
        value = self.stack.pop()
        self.keys.pop()
        size = _SLOT_SIZE if value.type is JsonType.ARRAY else _MEMBER_SIZE
        self.payload += size * len(value.value)
        self.finish(value)

    def open(self, jtype: JsonType, state: _State) -> None:
        node = self.new_value(jtype, [])
        self.pos += 1
        self.stack.append(node)
        self.keys.append(None)
        self.state = state

    def in_object(self, char: str) -> None:
        if char in _WHITESPACE:
            self.skip_whitespace(char)
        elif char == '"':
            if self.need_comma:
                raise self.error('Expected , before "')
            name, size = self.read_string()
            self.payload += size + 1
            self.keys[-1] = name
            self.need_colon = True
            self.state = _State.SEEK
        elif char == "}":
            self.close()
        elif char == "," and self.need_comma:
            self.need_comma = False
            self.pos += 1
        else:
            raise self.error(f"Unexpected `{_show(char)}` in object")

    def in_seek(self, char: str) -> None:
        if char in _WHITESPACE:
            self.skip_whitespace(char)
            return
        if char == "]":
            if not self.stack or self.stack[-1].type is not JsonType.ARRAY:
                raise self.error("Unexpected ]")
            self.close()
            return
        if self.need_comma:
            if char != ",":
                raise self.error(f"Expected , before {_show(char)}")
            self.need_comma = False
            self.pos += 1
            return
        if self.need_colon:
            if char != ":":
                raise self.error(f"Expected : before {_show(char)}")
            self.need_colon = False
            self.pos += 1
            return

        if char == "{":
            self.open(JsonType.OBJECT, _State.OBJECT)
        elif char == "[":
            self.open(JsonType.ARRAY, _State.SEEK)
        elif char == '"':
            node = self.new_value(JsonType.STRING, None)
            node.value, size = self.read_string()
            self.payload += size + 1
            self.finish(node)
        elif char in _LITERALS:
            self.finish(self.read_literal(char))
        elif char in _NUMBER_START:
            self.finish(self.read_number())
        else:
            raise self.error(f"Unexpected {_show(char)} when seeking value")

    def read_literal(self, char: str) -> JsonValue:
        word, jtype, value = _LITERALS[char]
        start = self.pos
        if self.end - start < len(word) - 1:
            raise self.error("Unknown value")
        for offset in range(1, len(word)):
            at = start + offset
            if at >= self.end or self.text[at] != word[offset]:
                raise self.error("Unknown value", at)
        node = self.new_value(jtype, value)
        self.pos = start + len(word)
        return node

    def read_number(self) -> JsonValue:
        node = self.new_value(JsonType.INTEGER, 0)
        value, self.pos = scan_number(self.text, self.pos, self.line,
                                      self.pos - self.line_begin)
        if isinstance(value, float):
            node.type = JsonType.DOUBLE
        node.value = value
        if self.settings.enable_comments and self.peek() == "/":
            raise self.error("Comment not allowed here")
        return node

    def read_string(self) -> tuple[str, int]:
        """Read a string at the opening quote; return it and its byte length."""
        text = self.text
        self.pos += 1
        out = bytearray()
        while True:
            run = _PLAIN_RUN.match(text, self.pos)
            if run:
                out += run.group().encode("latin-1")
                self.pos = run.end()
            if self.pos >= self.end:
                raise self.error("Unexpected EOF in string")
            if text[self.pos] == '"':
                self.pos += 1
                break
            self.pos += 1
            if self.pos >= self.end:
                raise self.error("Unexpected EOF in string")
            escape = text[self.pos]
            if escape == "u":
                out += self.read_unicode_escape()
                continue
            out += _SIMPLE_ESCAPES.get(escape, escape.encode("latin-1"))
            self.pos += 1
        try:
            decoded = out.decode("utf-8", "surrogatepass")
        except UnicodeDecodeError:
            decoded = out.decode("utf-8", "replace")
        return decoded, len(out)

    def read_unicode_escape(self) -> bytes:
        start = self.pos
        message = "Invalid character value `u`"
        if self.end - start < 4:
            raise self.error(message, start)
        code = 0
        for offset in range(1, 5):
            at = start + offset
            digit = hex_value(self.text[at]) if at < self.end else None
            if digit is None:
                raise self.error(message, at)
            code = code * 16 + digit
        self.pos = start + 5
        return encode_unicode_escape(code)

    def skip_comment(self) -> None:
        opener = self.pos + 1
        if opener >= self.end:
            raise self.error("EOF unexpected", opener)
        kind = self.text[opener]
        if kind == "/":
            stop = _LINE_END.search(self.text, opener + 1)
            self.pos = stop.start() if stop else self.end
        elif kind == "*":
            close = self.text.find("*/", opener + 1)
            if close < 0:
                raise self.error("Unexpected EOF in block comment", self.end)
            self.pos = close + 2
        else:
            raise self.error(
                f"Unexpected `{kind}` in comment opening sequence", opener
            )


def parse(data: bytes | str, settings: JsonSettings | None = None) -> JsonValue:
    """Parse JSON text into a JsonValue tree.

    A leading UTF-8 byte-order mark is skipped and a NUL byte ends the
    input. Raises JsonParseError when the text is malformed or the tree
    would exceed the memory budget.
    """
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")
    raw = bytes(data)
    if raw.startswith(_BOM):
        raw = raw[len(_BOM):]
    raw = raw.split(b"\0", 1)[0]
    return _Parser(raw.decode("latin-1"), settings or JsonSettings()).run()