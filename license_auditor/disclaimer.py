"""Provenance disclaimer insertion and verification for Markdown docs."""
from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from license_auditor.exceptions import DisclaimerError
from license_auditor.log import get_logger

logger = get_logger(__name__)

DEFAULT_DISCLAIMER_PATH = "docs/partials/AVISO-PROVENIENCIA.md"

# Only the head of each document is searched for the marker
HEAD_LINES = 30

DISCLAIMER_MARKER = re.compile(r"Proveni[eê]ncia e Autoria", re.IGNORECASE)

# Directories never searched when git is unavailable
SKIPPED_DIRS = frozenset(
    {"node_modules", "dist", ".git", "coverage", ".license-auditor"}
)

DEFAULT_EXCLUDED_PREFIXES = ("coverage/", "dist/", "node_modules/")


@dataclass
class DisclaimerReport:
    """Files touched or found lacking by a disclaimer run.

    Attributes:
        updated_files: Files the disclaimer was (or would be) prepended to.
        missing: Files whose head lacks the disclaimer marker.
    """

    updated_files: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def _git_markdown_files(root: Path) -> Optional[list[str]]:
    try:
        completed = subprocess.run(
            ["git", "ls-files", "*.md"],
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("git ls-files unavailable in %s: %s", root, e)
        return None
    return [line.strip() for line in completed.stdout.splitlines() if line.strip()]


def _walk_markdown_files(root: Path) -> list[str]:
    found: list[str] = []
    pending = [root]
    while pending:
        current = pending.pop()
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            logger.debug("Cannot list %s: %s", current, e)
            continue
        for entry in entries:
            if entry.is_dir():
                if entry.name not in SKIPPED_DIRS:
                    pending.append(entry)
            elif entry.suffix.lower() == ".md":
                found.append(entry.relative_to(root).as_posix())
    return sorted(found)


def list_markdown_files(
    root: Path,
    disclaimer_path: str,
    excluded_prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES,
) -> list[str]:
    """List the project's Markdown files, relative to ``root``.

    Tracked files come from ``git ls-files``; outside a git checkout the tree
    is walked instead. The disclaimer file itself is never listed.
    """
    files = _git_markdown_files(root)
    if files is None:
        files = _walk_markdown_files(root)
    prefixes = tuple(excluded_prefixes)
    return [
        f
        for f in files
        if f != disclaimer_path and not f.startswith(prefixes) and (root / f).is_file()
    ]


def has_disclaimer(content: str) -> bool:
    """Check whether the head of a document carries the disclaimer marker."""
    head = "\n".join(content.split("\n")[:HEAD_LINES])
    return DISCLAIMER_MARKER.search(head) is not None


def add_disclaimer(
    root: Union[str, Path],
    disclaimer_path: str = DEFAULT_DISCLAIMER_PATH,
    dry_run: bool = False,
) -> DisclaimerReport:
    """Prepend the disclaimer to every Markdown file lacking it.

    Args:
        root: Project root.
        disclaimer_path: Disclaimer file, relative to ``root``.
        dry_run: Report the files without writing them.

    Returns:
        DisclaimerReport listing the updated files.

    Raises:
        DisclaimerError: If the disclaimer file does not exist.
    """
    root_path = Path(root)
    disclaimer_file = root_path / disclaimer_path
    try:
        disclaimer_text = disclaimer_file.read_text(encoding="utf-8")
    except OSError as e:
        raise DisclaimerError(f"Disclaimer not found: {disclaimer_path}") from e

    report = DisclaimerReport()
    for rel in list_markdown_files(root_path, disclaimer_path):
        target = root_path / rel
        raw = target.read_bytes()
        if has_disclaimer(raw.decode("utf-8", errors="replace")):
            continue
        if not dry_run:
            # document bytes are preserved, including non-UTF-8 ones
            header = f"{disclaimer_text}\n\n".encode("utf-8")
            target.write_bytes(header + raw.lstrip() + b"\n")
        report.updated_files.append(rel)

    logger.info(
        "%s disclaimer in %d files",
        "Would insert" if dry_run else "Inserted",
        len(report.updated_files),
    )
    return report


def verify_disclaimer(
    root: Union[str, Path],
    disclaimer_path: str = DEFAULT_DISCLAIMER_PATH,
) -> DisclaimerReport:
    """Find Markdown files whose head lacks the disclaimer marker.

    Args:
        root: Project root.
        disclaimer_path: Disclaimer file, relative to ``root``.

    Returns:
        DisclaimerReport listing the files missing the disclaimer.
    """
    root_path = Path(root)
    report = DisclaimerReport()
    for rel in list_markdown_files(root_path, disclaimer_path):
        content = (root_path / rel).read_text(encoding="utf-8", errors="replace")
        if not has_disclaimer(content):
            report.missing.append(rel)
    return report
