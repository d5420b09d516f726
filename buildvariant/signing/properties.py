# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reader for Java-style .properties files.

key.properties is written for java.util.Properties, so we read the same
format: `key=value`, `key: value` or `key value`, `#`/`!` comments, backslash
line continuations, and backslash escapes including `\\uXXXX`.

Where Properties.load shrugs and carries on, we stop. A signing file that
parses into something other than what its author meant ends with a build
signed by the wrong key, so the following are errors here:
  - a line that is just a key, with no separator and no value
  - an empty key (line starting with a separator)
  - a malformed `\\u` escape
  - a continuation backslash on the last line of the file
  - the same key defined twice
"""

import re
from pathlib import Path

from buildvariant.config.exceptions import ConfigParseError

_WHITESPACE = " \t\f"
# Only CR, LF and CRLF end a line; str.splitlines also breaks on \f and U+2028.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SEPARATORS = "=:"
_ESCAPES: dict[str, str] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _ends_with_continuation(line: str) -> bool:
    """An odd number of trailing backslashes means the line continues."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _unescape(raw: str, source: str, line_number: int) -> str:
    out: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        i += 1
        if i >= len(raw):
            # Lone trailing backslash inside a joined line; Properties drops it.
            break
        esc = raw[i]
        if esc == "u":
            digits = raw[i + 1 : i + 5]
            if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise ConfigParseError(
                    f"Malformed \\uXXXX escape: '\\u{digits}'", source, line_number
                )
            out.append(chr(int(digits, 16)))
            i += 5
            continue

        out.append(_ESCAPES.get(esc, esc))
        i += 1

    return "".join(out)


def _split_key_value(line: str, source: str, line_number: int) -> tuple[str, str]:
    """
    Split one logical line into raw (still escaped) key and value.

    The key ends at the first unescaped '=', ':' or whitespace. Whitespace
    around the separator is skipped, and a whitespace separator may be
    followed by one '=' or ':'.
    """
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    if i >= length:
        raise ConfigParseError(
            f"Line has no separator: '{key}' (expected key=value)", source, line_number
        )
    if not key:
        raise ConfigParseError("Line has an empty key", source, line_number)

    j = i
    while j < length and line[j] in _WHITESPACE:
        j += 1
    if j < length and line[j] in _SEPARATORS:
        j += 1
        while j < length and line[j] in _WHITESPACE:
            j += 1

    return key, line[j:]


def parse_properties(text: str, source: str | Path = "<string>") -> dict[str, str]:
    """
    Parse the text of a .properties file into an ordered dict.

    Args:
        text: Full file contents.
        source: Name used in error messages, usually the file path.

    Returns:
        Mapping of decoded keys to decoded values, in file order.

    Raises:
        ConfigParseError: If any line is malformed (see module docstring).
    """
    source_name = str(source)
    physical = _LINE_BREAK.split(text)
    if physical[-1] == "":
        physical.pop()  # text ended with a line break
    result: dict[str, str] = {}

    index = 0
    while index < len(physical):
        start_line = index + 1
        line = physical[index].lstrip(_WHITESPACE)
        index += 1

        if not line or line[0] in "#!":
            continue

        while _ends_with_continuation(line):
            if index >= len(physical):
                raise ConfigParseError(
                    "Line continuation at end of file", source_name, start_line
                )
            line = line[:-1] + physical[index].lstrip(_WHITESPACE)
            index += 1

        raw_key, raw_value = _split_key_value(line, source_name, start_line)
        key = _unescape(raw_key, source_name, start_line)
        value = _unescape(raw_value, source_name, start_line)

        if key in result:
            raise ConfigParseError(f"Duplicate key '{key}'", source_name, start_line)
        result[key] = value

    return result
