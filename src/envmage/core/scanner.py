"""
Source tree scanning for process.env usage.

Walks a directory, pruning excluded names, and extracts the environment
variable names each matching source file reads.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set


# process.env.NAME, process?.env?.NAME and process.env["NAME"]
PROCESS_ENV = re.compile(
    r"process\??\.env\??\.\??([A-Z_][A-Z0-9_]*)"
    r"|process\??\.env\??\.?\[\s*['\"]([A-Z_][A-Z0-9_]*)['\"]\s*\]"
)


@dataclass
class VariableUsage:
    """One reference to an environment variable in source."""
    name: str
    file: str
    line: int


@dataclass
class ScanReport:
    """Everything a scan found."""
    files_scanned: int = 0
    usages: List[VariableUsage] = field(default_factory=list)
    file_results: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def variables(self) -> List[str]:
        return sorted({usage.name for usage in self.usages})


def extract_variables(code: str) -> List[str]:
    """
    Extract environment variable names read by a piece of code.

    Args:
        code: Source text

    Returns:
        Unique names in order of first use
    """
    names: List[str] = []
    for match in PROCESS_ENV.finditer(code):
        name = match.group(1) or match.group(2)
        if name not in names:
            names.append(name)
    return names


def extract_usages(code: str, file: str) -> List[VariableUsage]:
    """Extract every variable reference in code with its line number."""
    usages = []
    for line_no, line in enumerate(code.splitlines(), start=1):
        for name in extract_variables(line):
            usages.append(VariableUsage(name=name, file=file, line=line_no))
    return usages


def iter_source_files(
    root: Path,
    extensions: List[str],
    exclude: Optional[Set[str]] = None
) -> List[Path]:
    """
    Find source files under root.

    Directories and files whose name is in exclude are skipped. Files must
    carry one of the given extensions.

    Returns:
        Paths sorted for a stable scan order
    """
    excluded = exclude or set()
    wanted = {ext if ext.startswith('.') else f".{ext}" for ext in extensions}
    found = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)

        for filename in filenames:
            if filename in excluded:
                continue

            path = Path(dirpath) / filename
            if path.suffix in wanted:
                found.append(path)

    found.sort()
    return found


def scan_directory(
    root: str,
    extensions: List[str],
    exclude: Optional[List[str]] = None
) -> ScanReport:
    """
    Scan a directory tree for environment variable usage.

    Unreadable files are counted as scanned and contribute nothing.

    Args:
        root: Directory to scan
        extensions: File extensions to include (".ts" or "ts")
        exclude: Directory or file names to skip

    Returns:
        ScanReport with per-file results
    """
    report = ScanReport()
    root_path = Path(root)

    for path in iter_source_files(root_path, extensions, set(exclude or [])):
        report.files_scanned += 1
        try:
            code = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue

        display_name = str(path)
        usages = extract_usages(code, display_name)
        if usages:
            report.usages.extend(usages)
            report.file_results[display_name] = extract_variables(code)

    return report
