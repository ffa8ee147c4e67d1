"""
Strict .env validation producing line-tagged diagnostics.

Runs independently of the lenient parser: nothing is silently dropped,
every problem becomes a Diagnostic. Nothing here raises for bad input.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from .parser import ends_with_continuation, is_comment, is_quoted, split_assignment


KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
WHITESPACE = re.compile(r"\s")


class Severity(Enum):
    """Diagnostic severity."""
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(Enum):
    """What a diagnostic is about."""
    SYNTAX = "syntax"
    EMPTY_KEY = "empty_key"
    INVALID_KEY = "invalid_key"
    DUPLICATE_KEY = "duplicate_key"
    UNQUOTED_VALUE = "unquoted_value"
    WHITESPACE_LINE = "whitespace_line"


@dataclass
class Diagnostic:
    """A single validation finding."""
    line: int
    message: str
    severity: Severity
    kind: DiagnosticKind

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self):
        return f"Line {self.line}: {self.message}"


def _error(line: int, kind: DiagnosticKind, message: str) -> Diagnostic:
    return Diagnostic(line=line, message=message, severity=Severity.ERROR, kind=kind)


def _warning(line: int, kind: DiagnosticKind, message: str) -> Diagnostic:
    return Diagnostic(line=line, message=message, severity=Severity.WARNING, kind=kind)


def check_key(key: str, line: int, seen: Set[str]) -> Optional[Diagnostic]:
    """
    Check a key against the strict key rules.

    Empty beats invalid, invalid beats duplicate. Valid, unseen keys are
    added to seen.
    """
    if not key:
        return _error(line, DiagnosticKind.EMPTY_KEY, "Empty key")

    if not KEY_PATTERN.match(key):
        return _error(
            line,
            DiagnosticKind.INVALID_KEY,
            f'Invalid key "{key}": use letters, digits and underscores, not starting with a digit'
        )

    if key in seen:
        return _error(line, DiagnosticKind.DUPLICATE_KEY, f'Duplicate key "{key}"')

    seen.add(key)
    return None


def check_value(key: str, value: str, line: int) -> Optional[Diagnostic]:
    if value and not is_quoted(value) and WHITESPACE.search(value):
        return _warning(
            line,
            DiagnosticKind.UNQUOTED_VALUE,
            f'Unquoted value with spaces, consider quoting: {key}="{value}"'
        )
    return None


def validate(content: str) -> List[Diagnostic]:
    """
    Validate .env content line by line.

    Continuation lines have their trailing backslash removed and are then
    checked like any other line.

    Args:
        content: .env file content with LF line endings

    Returns:
        Diagnostics ordered by line number
    """
    diagnostics: List[Diagnostic] = []
    seen: Set[str] = set()

    for line_no, line in enumerate(content.split('\n'), start=1):
        stripped = line.strip()
        if not stripped or is_comment(stripped):
            continue

        if ends_with_continuation(stripped):
            stripped = stripped[:-1].strip()

        assignment = split_assignment(stripped)
        if assignment is None:
            diagnostics.append(
                _error(line_no, DiagnosticKind.SYNTAX, "Invalid syntax, expected KEY=VALUE")
            )
            continue

        key, value = assignment

        key_issue = check_key(key, line_no, seen)
        if key_issue:
            diagnostics.append(key_issue)

        value_issue = check_value(key, value, line_no)
        if value_issue:
            diagnostics.append(value_issue)

    return diagnostics


def lint(content: str) -> List[Diagnostic]:
    """
    Validate content and also flag whitespace-only lines.

    Args:
        content: .env file content with LF line endings

    Returns:
        Diagnostics ordered by line number
    """
    diagnostics = validate(content)

    for line_no, line in enumerate(content.split('\n'), start=1):
        if line and not line.strip():
            diagnostics.append(
                _warning(line_no, DiagnosticKind.WHITESPACE_LINE, "Line contains only whitespace")
            )

    # sort is stable, so same-line diagnostics keep their order
    diagnostics.sort(key=lambda d: d.line)
    return diagnostics


def errors(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity == Severity.ERROR]


def warnings(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity == Severity.WARNING]
