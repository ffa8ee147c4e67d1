"""
env-mage - .env file toolkit

Generate templates, validate, sync and diff key sets, lint syntax, generate
TypeScript types and scan source trees for environment variable usage.
"""

__version__ = "1.1.0"

from .core import parser, validator, keyset, fileio

__all__ = [
    "parser",
    "validator",
    "keyset",
    "fileio",
]
