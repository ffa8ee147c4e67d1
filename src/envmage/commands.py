"""
env-mage command implementations.

Each command reads its files, runs the core parser/validator/key set
operations and returns a CommandResult. Expected failures (missing files,
write errors, unknown option values) are returned, never raised, so the
CLI can decide how to report them.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from .core import config
from .core.fileio import (
    EnvFileNotFoundError,
    EnvMageError,
    find_matching_example,
    read_text,
    write_text,
    write_text_with_backup,
)
from .core.keyset import apply_strategy, changed_keys, extra_keys, missing_keys, parse_strategy
from .core.parser import parse, stringify
from .core.scanner import scan_directory
from .core.typegen import parse_format, render_types
from .core.validator import errors, lint, warnings
from .results import (
    CommandResult,
    DiffData,
    EnvJsonData,
    InitData,
    LintData,
    ScanData,
    SyncData,
    TypegenData,
    ValidateData,
)


def _write(path: str, content: str, backup: bool) -> Optional[str]:
    """Write content, with a backup of the old file when requested."""
    if backup:
        return write_text_with_backup(path, content)
    write_text(path, content)
    return None


def _resolve_backup(backup: Optional[bool]) -> bool:
    return config.default_backup() if backup is None else backup


def resolve_example_file(env_file: str, example_file: Optional[str] = None) -> str:
    """
    Pick the template an env file is validated against.

    An explicit example wins, then <env>.example beside the env file, then
    .env.example in the env file's directory.
    """
    if example_file:
        return example_file

    matching = find_matching_example(env_file)
    if matching is not None:
        return str(matching)

    return str(Path(env_file).with_name(config.ENV_EXAMPLE_FILE))


def init_command(
    env_file: str = config.ENV_FILE,
    output: str = config.ENV_EXAMPLE_FILE,
    backup: Optional[bool] = None
) -> CommandResult[InitData]:
    """
    Generate a template from an env file, keeping keys and blanking values.

    Args:
        env_file: Source .env file
        output: Template file to write
        backup: Back up an existing template (default from ENVMAGE_BACKUP)

    Returns:
        CommandResult with InitData
    """
    backup = _resolve_backup(backup)

    try:
        env = parse(read_text(env_file))
        template = {key: "" for key in env}
        backup_path = _write(output, stringify(template), backup)
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    return CommandResult(
        success=True,
        message=f"Created {Path(output).name} with {len(template)} keys",
        data=InitData(file=output, key_count=len(template), backup_path=backup_path),
    )


def validate_command(
    env_file: str = config.ENV_FILE,
    example_file: Optional[str] = None,
    strict: bool = False
) -> CommandResult[ValidateData]:
    """
    Check an env file for keys missing from, or extra to, its template.

    Missing keys always fail; extra keys fail only in strict mode.

    Args:
        env_file: .env file to check
        example_file: Template to check against (resolved when omitted)
        strict: Treat extra keys as failures

    Returns:
        CommandResult with ValidateData
    """
    example_file = resolve_example_file(env_file, example_file)

    try:
        env = parse(read_text(env_file))
        example = parse(read_text(example_file))
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    missing = missing_keys(env, example)
    extra = extra_keys(env, example)
    matched = len(example) - len(missing)

    env_name = Path(env_file).name
    valid = not missing and (not strict or not extra)

    data = ValidateData(
        valid=valid,
        matched=matched,
        missing=missing,
        extra=extra,
        env_file_name=env_name,
        example_file_name=Path(example_file).name,
    )

    if valid:
        return CommandResult(success=True, message="All keys are valid between files", data=data)

    messages = []
    if missing:
        messages.append(f"Missing keys in {env_name}: {', '.join(missing)}")
    if extra:
        messages.append(f"Extra keys in {env_name}: {', '.join(extra)}")

    return CommandResult(success=False, message=" | ".join(messages), data=data)


def sync_command(
    source: str = config.ENV_FILE,
    target: str = config.ENV_EXAMPLE_FILE,
    strategy: str = "merge",
    backup: Optional[bool] = None
) -> CommandResult[SyncData]:
    """
    Sync keys from a source env file into a target file.

    Strategies:
    - merge: source values win, keys only the target has survive
    - overwrite: target becomes a copy of source
    - preserve: target values win, source only fills missing keys

    Args:
        source: File keys come from
        target: File being rewritten
        strategy: Sync strategy name
        backup: Back up the target first (default from ENVMAGE_BACKUP)

    Returns:
        CommandResult with SyncData
    """
    backup = _resolve_backup(backup)

    try:
        sync_strategy = parse_strategy(strategy)
    except ValueError as e:
        return CommandResult.failure(str(e), e)

    try:
        source_env = parse(read_text(source))
    except EnvFileNotFoundError as e:
        return CommandResult.failure(f"Source file not found: {source}", e)
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    try:
        target_env = parse(read_text(target))
    except EnvFileNotFoundError as e:
        return CommandResult.failure(f"Target file not found: {target}", e)
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    merged = apply_strategy(source_env, target_env, sync_strategy)

    try:
        backup_path = _write(target, stringify(merged), backup)
    except EnvMageError as e:
        return CommandResult.failure(f"Sync failed: {e}", e)

    added_count = len(missing_keys(target_env, source_env))
    kept_count = len([key for key in target_env if key in merged])

    details = f"strategy: {sync_strategy.value}"
    if backup_path:
        details += ", backup created"

    return CommandResult(
        success=True,
        message=f"Synced {added_count} new keys, kept {kept_count} existing ({details})",
        data=SyncData(
            file=target,
            strategy=sync_strategy.value,
            added_count=added_count,
            kept_count=kept_count,
            mapping=merged,
            backup_path=backup_path,
        ),
    )


def diff_command(
    from_file: str = config.ENV_FILE,
    to_file: str = config.ENV_EXAMPLE_FILE
) -> CommandResult[DiffData]:
    """
    Compare two env files.

    added: keys only in to_file; removed: keys only in from_file;
    changed: keys in both with different values.

    Returns:
        CommandResult with DiffData
    """
    try:
        before = parse(read_text(from_file))
        after = parse(read_text(to_file))
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    added = missing_keys(before, after)
    removed = extra_keys(before, after)
    changed = changed_keys(before, after)
    unchanged = [key for key, value in before.items() if key in after and after[key] == value]

    if not (added or removed or changed):
        message = "Files are identical. No differences found."
    else:
        parts = []
        if added:
            parts.append(f"Added: {', '.join(added)}")
        if removed:
            parts.append(f"Removed: {', '.join(removed)}")
        if changed:
            parts.append(f"Changed: {', '.join(changed)}")
        message = "Diff complete: " + " ".join(parts)

    return CommandResult(
        success=True,
        message=message,
        data=DiffData(
            from_file=from_file,
            to_file=to_file,
            added=added,
            removed=removed,
            changed=changed,
            unchanged=unchanged,
        ),
    )


def lint_command(
    file: str = config.ENV_FILE,
    strict: bool = False,
    show_warnings: bool = False
) -> CommandResult[LintData]:
    """
    Lint an env file's syntax.

    Args:
        file: .env file to lint
        strict: Fail on warnings as well as errors
        show_warnings: Include warnings in the reported issues

    Returns:
        CommandResult with LintData
    """
    try:
        content = read_text(file)
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    diagnostics = lint(content)
    error_list = errors(diagnostics)
    warning_list = warnings(diagnostics)
    key_count = len(parse(content))

    valid = not error_list and (not strict or not warning_list)

    if valid:
        message = f"No issues found ({key_count} keys)"
    else:
        message = f"Found {len(error_list)} error(s) and {len(warning_list)} warning(s)"

    return CommandResult(
        success=valid,
        message=message,
        data=LintData(
            file=file,
            valid=valid,
            error_count=len(error_list),
            warning_count=len(warning_list),
            key_count=key_count,
            issues=diagnostics if show_warnings else error_list,
        ),
    )


def typegen_command(
    env_file: str = config.ENV_FILE,
    output: str = config.TYPES_FILE,
    fmt: str = "interface",
    strict: bool = False
) -> CommandResult[TypegenData]:
    """
    Generate TypeScript declarations from an env file.

    Returns:
        CommandResult with TypegenData
    """
    try:
        type_format = parse_format(fmt)
    except ValueError as e:
        return CommandResult.failure(str(e), e)

    try:
        env = parse(read_text(env_file))
        content = render_types(env, type_format, strict=strict)
        write_text(output, content)
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    return CommandResult(
        success=True,
        message=f"Generated TypeScript types in {output}",
        data=TypegenData(
            output=output,
            format=type_format.value,
            key_count=len(env),
            content=content,
        ),
    )


def envjson_command(
    env_file: str = config.ENV_FILE,
    output: str = config.JSON_FILE,
    include_values: bool = False
) -> CommandResult[EnvJsonData]:
    """
    Write a JSON object with the keys of an env file.

    Values are null unless include_values is set.

    Returns:
        CommandResult with EnvJsonData
    """
    try:
        env = parse(read_text(env_file))
        structure = {key: (value if include_values else None) for key, value in env.items()}
        write_text(output, json.dumps(structure, indent=2) + "\n")
    except EnvMageError as e:
        return CommandResult.failure(str(e), e)

    return CommandResult(
        success=True,
        message=f"Created {output} with {len(structure)} keys",
        data=EnvJsonData(output=output, key_count=len(structure), include_values=include_values),
    )


def scan_command(
    path: str = config.SCAN_PATH,
    extensions: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    env_file: Optional[str] = None
) -> CommandResult[ScanData]:
    """
    Scan a source tree for process.env usage.

    With env_file, also reports variables the code reads that the file
    lacks (missing) and keys the file defines that no code reads (unused).

    Args:
        path: Directory to scan
        extensions: File extensions (default from ENVMAGE_SCAN_EXTENSIONS)
        exclude: Names to prune (default from ENVMAGE_SCAN_EXCLUDE)
        env_file: Optional .env file to cross-check

    Returns:
        CommandResult with ScanData
    """
    if extensions is None:
        extensions = config.default_scan_extensions()
    if exclude is None:
        exclude = config.default_scan_exclude()

    if not Path(path).is_dir():
        error = EnvFileNotFoundError(path)
        return CommandResult.failure(f"Path not found: {path}", error)

    report = scan_directory(path, extensions, exclude)
    variables = report.variables

    missing: List[str] = []
    unused: List[str] = []
    if env_file:
        try:
            env = parse(read_text(env_file))
        except EnvMageError as e:
            return CommandResult.failure(str(e), e)

        used: Dict[str, str] = {name: "" for name in variables}
        missing = missing_keys(env, used)
        unused = extra_keys(env, used)

    return CommandResult(
        success=True,
        message=f"Scanned {report.files_scanned} files, found {len(variables)} unique variables",
        data=ScanData(
            path=path,
            files_scanned=report.files_scanned,
            variables=variables,
            file_results=report.file_results,
            usages=report.usages,
            env_file=env_file,
            missing=missing,
            unused=unused,
        ),
    )
