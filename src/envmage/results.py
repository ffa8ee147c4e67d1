"""
Result types returned by env-mage commands.

Every command returns a CommandResult whose data field holds the payload
dataclass for that command (InitData, ValidateData, ...). Failed commands
carry a message and the underlying error instead of data.
"""

from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar

from .core.scanner import VariableUsage
from .core.validator import Diagnostic


T = TypeVar("T")


@dataclass
class CommandResult(Generic[T]):
    """Outcome of a single command invocation."""
    success: bool
    message: str
    data: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def failure(cls, message: str, error: Optional[Exception] = None) -> "CommandResult[T]":
        return cls(success=False, message=message, error=error)


@dataclass
class InitData:
    file: str
    key_count: int
    backup_path: Optional[str] = None


@dataclass
class ValidateData:
    valid: bool
    matched: int
    missing: List[str]
    extra: List[str]
    env_file_name: str
    example_file_name: str

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def extra_count(self) -> int:
        return len(self.extra)


@dataclass
class SyncData:
    file: str
    strategy: str
    added_count: int
    kept_count: int
    mapping: Dict[str, str] = field(default_factory=dict)
    backup_path: Optional[str] = None


@dataclass
class DiffData:
    from_file: str
    to_file: str
    added: List[str]
    removed: List[str]
    changed: List[str]
    unchanged: List[str]

    @property
    def summary(self) -> Dict[str, int]:
        return {
            'added': len(self.added),
            'removed': len(self.removed),
            'changed': len(self.changed),
            'unchanged': len(self.unchanged),
        }


@dataclass
class LintData:
    file: str
    valid: bool
    error_count: int
    warning_count: int
    key_count: int
    issues: List[Diagnostic] = field(default_factory=list)


@dataclass
class TypegenData:
    output: str
    format: str
    key_count: int
    content: str


@dataclass
class EnvJsonData:
    output: str
    key_count: int
    include_values: bool


@dataclass
class ScanData:
    path: str
    files_scanned: int
    variables: List[str]
    file_results: Dict[str, List[str]]
    usages: List[VariableUsage] = field(default_factory=list)
    env_file: Optional[str] = None
    missing: List[str] = field(default_factory=list)
    unused: List[str] = field(default_factory=list)
