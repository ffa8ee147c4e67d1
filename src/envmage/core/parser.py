"""
Lenient .env parser and serializer.

Parsing never fails: blank lines, comments and lines that are not
assignments are skipped. Strict checking lives in the validator module.

Grammar handled here:
    KEY=value
    KEY = "quoted value"
    export KEY='single quoted'
    KEY=first line \\
    continued line
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


EXPORT_PREFIX = re.compile(r"^export\s+", re.IGNORECASE)
NEEDS_QUOTING = re.compile(r"[\s='\"`\\$]")
QUOTE_CHARS = ('"', "'")


@dataclass
class EnvEntry:
    """A single assignment and the line it starts on (1-based)."""
    key: str
    value: str
    line: int

    def __repr__(self):
        return f"EnvEntry({self.key}={self.value!r}, line={self.line})"


def is_comment(line: str) -> bool:
    return line.lstrip().startswith('#')


def ends_with_continuation(text: str) -> bool:
    """True if text ends with an odd run of backslashes."""
    trailing = len(text) - len(text.rstrip('\\'))
    return trailing % 2 == 1


def strip_quotes(value: str) -> str:
    """Remove one pair of matching quotes wrapping the whole value."""
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def is_quoted(value: str) -> bool:
    return strip_quotes(value) != value


def split_assignment(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a line into a trimmed (key, value) pair.

    The export prefix is dropped first. Returns None when the line holds no
    '='. The key may be empty or malformed; callers decide what to do.
    """
    working = EXPORT_PREFIX.sub('', line.strip(), count=1)
    if '=' not in working:
        return None

    key, _, value = working.partition('=')
    return key.strip(), value.strip()


class Parser:
    """
    Line-oriented parser for .env content.

    Expects content with LF line endings; the file layer normalizes CRLF.
    """

    def __init__(self, content: str):
        self.content = content
        self.lines = content.split('\n')

    def entries(self) -> List[EnvEntry]:
        """
        Parse content into entries in file order.

        Returns:
            List of EnvEntry objects, duplicates included.
        """
        entries = []
        pending: Optional[EnvEntry] = None
        segments: List[str] = []

        for line_no, line in enumerate(self.lines, start=1):
            # Inside a continuation every line is value text
            if pending is not None:
                if ends_with_continuation(line):
                    segments.append(line[:-1])
                    continue

                segments.append(line)
                pending.value = self._join(segments)
                entries.append(pending)
                pending = None
                segments = []
                continue

            stripped = line.strip()
            if not stripped or is_comment(stripped):
                continue

            assignment = split_assignment(stripped)
            if assignment is None:
                continue

            key, value = assignment
            if not key:
                continue

            if ends_with_continuation(value):
                pending = EnvEntry(key=key, value="", line=line_no)
                segments = [value[:-1]]
                continue

            entries.append(EnvEntry(key=key, value=strip_quotes(value), line=line_no))

        # Unterminated continuation at end of input
        if pending is not None:
            pending.value = self._join(segments)
            entries.append(pending)

        return entries

    @staticmethod
    def _join(segments: List[str]) -> str:
        return strip_quotes('\n'.join(segments).rstrip())


def parse(content: str) -> Dict[str, str]:
    """
    Parse .env content into an ordered key/value mapping.

    Later assignments of a key overwrite earlier ones but the key keeps
    the position of its first appearance.

    Args:
        content: .env file content with LF line endings

    Returns:
        Dictionary of key-value pairs
    """
    env: Dict[str, str] = {}
    for entry in Parser(content).entries():
        env[entry.key] = entry.value
    return env


def parse_entries(content: str) -> List[EnvEntry]:
    """
    Parse .env content keeping line numbers.

    Args:
        content: .env file content with LF line endings

    Returns:
        List of EnvEntry objects in file order
    """
    return Parser(content).entries()


def format_value(value: str) -> str:
    """Quote a value when it would not survive an unquoted round-trip."""
    if not NEEDS_QUOTING.search(value):
        return value

    # Embedded newlines become backslash continuations
    return '"' + value.replace('\n', '\\\n') + '"'


def stringify(env: Dict[str, str]) -> str:
    """
    Serialize a mapping to .env content.

    One KEY=VALUE line per entry in insertion order. A non-empty mapping
    ends with a single newline; an empty mapping gives an empty string.

    Args:
        env: Mapping of keys to values

    Returns:
        .env file content
    """
    lines = [f"{key}={format_value(value)}" for key, value in env.items()]
    if not lines:
        return ""
    return '\n'.join(lines) + '\n'
