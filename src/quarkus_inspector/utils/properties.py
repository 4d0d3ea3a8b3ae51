"""Java .properties reader used as a PropertyLookup.

Supports the subset of java.util.Properties syntax found in Quarkus
application.properties files:
- '#' and '!' comment lines
- '=', ':' or whitespace between key and value
- backslash line continuation
- escapes: \\t \\n \\r \\f \\uXXXX and escaped separators
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

APPLICATION_PROPERTIES_PATH = Path("src", "main", "resources", "application.properties")

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"

# Integer.parseInt syntax: optional sign, ASCII digits only
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _unescape(text: str) -> str:
    result: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 >= len(text):
            result.append(char)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                result.append(chr(int(text[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                logger.warning(f"Malformed \\u escape in properties: {text[i:i + 6]!r}")
        result.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(result)


def _logical_lines(lines: Iterable[str]) -> Iterable[str]:
    """Join continuation lines and drop blanks and comments."""
    buffer = ""
    continuing = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        stripped = line.lstrip(_WHITESPACE)
        if not continuing and (not stripped or stripped[0] in "#!"):
            continue

        # Odd number of trailing backslashes means continuation
        trailing = len(stripped) - len(stripped.rstrip("\\"))
        if trailing % 2 == 1:
            buffer += stripped[:-1]
            continuing = True
            continue

        yield buffer + stripped
        buffer = ""
        continuing = False

    if continuing and buffer:
        yield buffer


def _split_entry(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse .properties text into a dict. Later keys override earlier ones."""
    entries: dict[str, str] = {}
    for line in _logical_lines(text.splitlines()):
        key, value = _split_entry(line)
        entries[key] = value
    return entries


class PropertiesFile:
    """Read-only property lookup backed by a .properties file (or a mapping)."""

    def __init__(self, entries: Mapping[str, str] | None = None, source: Path | None = None):
        self._entries: dict[str, str] = dict(entries or {})
        self.source = source

    @classmethod
    def load(cls, path: str | Path) -> PropertiesFile:
        """Load a .properties file. A missing file yields an empty lookup."""
        path = Path(path)
        if not path.is_file():
            logger.debug(f"No properties file at {path}, using defaults")
            return cls(source=path)

        entries = parse_properties(path.read_text(encoding="utf-8"))
        logger.debug(f"Loaded {len(entries)} properties from {path}")
        return cls(entries, source=path)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def get_property(self, key: str, default: str) -> str:
        return self._entries.get(key, default)

    def get_property_as_int(self, key: str, default: int) -> int:
        value = self._entries.get(key)
        if value is None:
            return default
        text = value.strip()
        if _INTEGER.fullmatch(text):
            return int(text)
        logger.warning(f"Property {key}={value!r} is not an integer, using {default}")
        return default


def find_application_properties(project_root: str | Path) -> Path | None:
    """Return src/main/resources/application.properties under the project, if present."""
    candidate = Path(project_root) / APPLICATION_PROPERTIES_PATH
    if candidate.is_file():
        return candidate
    return None
