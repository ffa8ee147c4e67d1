"""
TypeScript declaration generation for .env files.

This module infers a type for each value:
- boolean ("true"/"false", any case)
- number (numeric strings, except zero-padded ones like "0123")
- array / object (JSON literals)
- string (everything else)

and renders the mapping as an interface, a type alias, or a const object.
"""

import json
import re
from enum import Enum
from typing import Dict, List


class TypeFormat(Enum):
    """Declaration style for generated types."""
    INTERFACE = "interface"
    TYPE = "type"
    CONST = "const"


# Inferred type -> TypeScript type
TS_TYPES = {
    'boolean': 'boolean',
    'number': 'number',
    'array': 'unknown[]',
    'object': 'Record<string, unknown>',
    'string': 'string',
}

NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$|^0[xX][0-9a-fA-F]+$")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

HEADER = [
    "/**",
    " * Environment variable types generated by env-mage.",
    " * Regenerate with `env-mage typegen` instead of editing by hand.",
    " */",
]


def detect_value_type(value: str) -> str:
    """
    Infer the type of a raw .env value.

    Args:
        value: Value to analyze

    Returns:
        One of: "boolean", "number", "array", "object", "string"
    """
    text = value.strip()
    if not text:
        return 'string'

    if text.lower() in ('true', 'false'):
        return 'boolean'

    if NUMBER_PATTERN.match(text):
        # Leading zeros usually mean an identifier (zip code, PIN)
        if text.startswith('0') and text != '0' and not text.lower().startswith('0x') and '.' not in text:
            return 'string'
        return 'number'

    try:
        parsed = json.loads(text)
    except ValueError:
        return 'string'

    if isinstance(parsed, list):
        return 'array'
    if isinstance(parsed, dict):
        return 'object'
    return 'string'


def ts_type(value: str) -> str:
    return TS_TYPES[detect_value_type(value)]


def _property(key: str) -> str:
    return key if IDENTIFIER_PATTERN.match(key) else json.dumps(key)


def _env_access(key: str) -> str:
    if IDENTIFIER_PATTERN.match(key):
        return f"process.env.{key}"
    return f"process.env[{json.dumps(key)}]"


def _members(env: Dict[str, str], strict: bool) -> List[str]:
    members = []
    for key, value in env.items():
        optional = "?" if not strict and not value else ""
        members.append(f"  {_property(key)}{optional}: {ts_type(value)};")
    return members


def render_types(
    env: Dict[str, str],
    fmt: TypeFormat = TypeFormat.INTERFACE,
    strict: bool = False,
    name: str = "Env"
) -> str:
    """
    Render TypeScript declarations for a parsed .env mapping.

    In non-strict mode keys with empty values are optional. Strict mode
    makes every key required.

    Args:
        env: Parsed .env mapping
        fmt: TypeFormat to render
        strict: Require every key
        name: Name of the generated interface or type

    Returns:
        TypeScript source ending with a newline
    """
    lines = list(HEADER)

    if fmt == TypeFormat.INTERFACE:
        lines.append(f"export interface {name} {{")
        lines.extend(_members(env, strict))
        lines.append("}")

    elif fmt == TypeFormat.TYPE:
        lines.append(f"export type {name} = {{")
        lines.extend(_members(env, strict))
        lines.append("};")

    else:
        suffix = " as string" if strict else ""
        lines.append("export const env = {")
        for key in env:
            lines.append(f"  {_property(key)}: {_env_access(key)}{suffix},")
        lines.append("} as const;")
        lines.append("")
        lines.append(f"export type {name} = typeof env;")

    return '\n'.join(lines) + '\n'


def parse_format(value) -> TypeFormat:
    """
    Coerce a format name to TypeFormat.

    Raises:
        ValueError: If the name is not a known format
    """
    if isinstance(value, TypeFormat):
        return value

    try:
        return TypeFormat(str(value).lower())
    except ValueError:
        choices = ", ".join(f.value for f in TypeFormat)
        raise ValueError(f"Unknown type format '{value}' (expected one of: {choices})")
