"""
env-mage core modules.

Includes:
- parser: Lenient .env parsing and serialization
- validator: Strict line-by-line diagnostics
- keyset: Missing/extra/changed keys and sync strategies
- fileio: File reads, writes and backups
- typegen: TypeScript declaration rendering
- scanner: process.env usage scanning
- config: Defaults and environment overrides
"""

from . import config
from . import parser
from . import validator
from . import keyset
from . import fileio
from . import typegen
from . import scanner

__all__ = [
    "config",
    "parser",
    "validator",
    "keyset",
    "fileio",
    "typegen",
    "scanner",
]
