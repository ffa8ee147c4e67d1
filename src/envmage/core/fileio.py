"""
File access for env-mage commands.

Reads normalize CRLF to LF before content reaches the parser. Failures are
raised as EnvMageError subclasses so commands can turn them into results.
"""

import shutil
from pathlib import Path
from typing import Optional, Union

from .config import BACKUP_SUFFIX, EXAMPLE_SUFFIX


PathLike = Union[str, Path]


class EnvMageError(Exception):
    """Base error for env-mage file operations."""


class EnvFileNotFoundError(EnvMageError):
    """A required input file does not exist."""

    def __init__(self, path: PathLike):
        self.path = str(path)
        super().__init__(f"File not found: {self.path}")


class EnvFileIOError(EnvMageError):
    """Reading or writing a file failed."""

    def __init__(self, path: PathLike, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to access {self.path}: {reason}")


def file_exists(path: PathLike) -> bool:
    return Path(path).is_file()


def read_text(path: PathLike) -> str:
    """
    Read a UTF-8 text file with LF line endings.

    Args:
        path: File to read

    Returns:
        File content

    Raises:
        EnvFileNotFoundError: If path is missing or not a regular file
        EnvFileIOError: If the file cannot be read or decoded
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise EnvFileNotFoundError(path)

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileIOError(path, str(e)) from e

    return content.replace('\r\n', '\n')


def write_text(path: PathLike, content: str) -> None:
    """
    Write a UTF-8 text file, creating parent directories as needed.

    Raises:
        EnvFileIOError: If the write fails
    """
    file_path = Path(path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        # newline='' keeps LF on every platform
        with open(file_path, 'w', encoding="utf-8", newline='') as f:
            f.write(content)
    except OSError as e:
        raise EnvFileIOError(path, str(e)) from e


def backup_path_for(path: PathLike) -> Path:
    file_path = Path(path)
    return file_path.with_name(file_path.name + BACKUP_SUFFIX)


def write_text_with_backup(path: PathLike, content: str) -> Optional[str]:
    """
    Write a file, first copying any existing version to <path>.backup.

    Args:
        path: File to write
        content: New content

    Returns:
        Backup path if a backup was made, else None

    Raises:
        EnvFileIOError: If the backup copy or the write fails
    """
    backup: Optional[str] = None

    if file_exists(path):
        target = backup_path_for(path)
        try:
            shutil.copyfile(path, target)
        except OSError as e:
            raise EnvFileIOError(target, str(e)) from e
        backup = str(target)

    write_text(path, content)
    return backup


def find_matching_example(env_path: PathLike) -> Optional[Path]:
    """
    Find the template paired with an env file.

    e.g. config/.env.staging -> config/.env.staging.example

    Returns:
        Path to the example file if it exists, else None
    """
    env_file = Path(env_path)
    candidate = env_file.with_name(env_file.name + EXAMPLE_SUFFIX)
    return candidate if candidate.is_file() else None
