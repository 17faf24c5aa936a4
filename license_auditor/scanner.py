"""Scanner module for installed-package discovery and license resolution."""
from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from license_auditor.analysis.aggregate import aggregate
from license_auditor.analysis.filtering import filter_ignored_packages
from license_auditor.analysis.overrides import apply_license_overrides
from license_auditor.analysis.policy import policy_from_config
from license_auditor.cache.scan_cache import ScanCache
from license_auditor.config.defaults import get_default_config
from license_auditor.constants import INSTALL_DIR_NAME
from license_auditor.exceptions import ScanError
from license_auditor.log import get_logger
from license_auditor.models.config import AuditorConfig
from license_auditor.models.scan import IgnoredPackagesSummary, PackageRecord, ScanResult
from license_auditor.normalizer import LicenseGrammarService
from license_auditor.resolvers.package import PackageResolver

logger = get_logger(__name__)

# Bound on package directories read at the same time
MAX_CONCURRENT_RESOLUTIONS = 16

BIN_DIR_NAME = ".bin"
SCOPE_PREFIX = "@"


def list_dir_entries(path: Path) -> list[str]:
    """List the entry names of a directory, sorted.

    Args:
        path: Directory to list.

    Returns:
        Sorted entry names, or an empty list on any access failure.
    """
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        logger.debug("Cannot list %s: %s", path, e)
        return []


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def walk_install_dir(install_dir: Path) -> list[Path]:
    """Enumerate installed package directories.

    Plain entries are package directories; ``@scope`` entries hold package
    directories one level deeper. ``.bin`` and non-directories are skipped,
    as is any single entry that cannot be inspected.

    Args:
        install_dir: The ``node_modules`` directory.

    Returns:
        Candidate package directories in sorted order. Empty if the install
        directory does not exist.

    Raises:
        ScanError: If the install directory exists but cannot be listed.
    """
    try:
        names = sorted(os.listdir(install_dir))
    except FileNotFoundError:
        logger.debug("No install directory at %s", install_dir)
        return []
    except OSError as e:
        raise ScanError(f"Cannot read install directory '{install_dir}': {e}") from e

    package_dirs: list[Path] = []
    for name in names:
        if name == BIN_DIR_NAME:
            continue
        entry = install_dir / name
        if name.startswith(SCOPE_PREFIX):
            for scoped_name in list_dir_entries(entry):
                scoped = entry / scoped_name
                if _is_dir(scoped):
                    package_dirs.append(scoped)
        elif _is_dir(entry):
            package_dirs.append(entry)
    return package_dirs


async def resolve_packages(
    package_dirs: list[Path],
    resolver: Optional[PackageResolver] = None,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> list[PackageRecord]:
    """Resolve package directories concurrently.

    Each directory is read in a worker thread; directories that are not
    packages are dropped.

    Args:
        package_dirs: Directories produced by walk_install_dir.
        resolver: Resolver to use. Defaults to a PackageResolver.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show a progress bar when a console is given.

    Returns:
        Records in the order of ``package_dirs``.
    """
    active_resolver = resolver or PackageResolver()
    semaphore = asyncio.Semaphore(MAX_CONCURRENT_RESOLUTIONS)

    async def resolve_one(idx: int, package_dir: Path) -> tuple[int, Optional[PackageRecord]]:
        async with semaphore:
            record = await asyncio.to_thread(active_resolver.resolve, package_dir)
            return idx, record

    tasks = [resolve_one(i, d) for i, d in enumerate(package_dirs)]
    resolved: list[Optional[PackageRecord]] = [None] * len(package_dirs)

    if console is not None and show_progress and package_dirs:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(
                f"Reading {len(package_dirs)} package directories...",
                total=len(package_dirs),
            )
            for coro in asyncio.as_completed(tasks):
                idx, record = await coro
                resolved[idx] = record
                progress.advance(task_id)
    else:
        for idx, record in await asyncio.gather(*tasks):
            resolved[idx] = record

    return [record for record in resolved if record is not None]


async def scan_async(
    root: Union[str, Path],
    config: Optional[AuditorConfig] = None,
    cache: Optional[ScanCache] = None,
    console: Optional[Console] = None,
    show_progress: bool = False,
    grammar: Optional[LicenseGrammarService] = None,
) -> ScanResult:
    """Scan the installed dependencies of a project.

    The raw scan (every package, baseline classification) is what the cache
    stores; configuration is applied afterwards, so a cache hit and a fresh
    scan produce the same result.

    Args:
        root: Project root holding ``node_modules``.
        config: Project configuration. Defaults to no policy.
        cache: Optional cache consulted before and refreshed after scanning.
        console: Optional Rich Console for progress display.
        show_progress: Whether to show a progress bar.
        grammar: Grammar service for normalization. Defaults to the
            process-wide service.

    Returns:
        Aggregated scan result.

    Raises:
        ScanError: If the root does not exist, is not a directory, or its
            install directory cannot be read.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise ScanError(f"Project root '{root_path}' does not exist")
    if not root_path.is_dir():
        raise ScanError(f"Project root '{root_path}' is not a directory")

    active_config = config if config is not None else get_default_config()

    raw = cache.load() if cache is not None else None
    if raw is None:
        package_dirs = walk_install_dir(root_path / INSTALL_DIR_NAME)
        records = await resolve_packages(
            package_dirs,
            resolver=PackageResolver(grammar),
            console=console,
            show_progress=show_progress,
        )
        raw = aggregate(records)
        logger.info("Scanned %d packages under %s", raw.total_packages, root_path)
        if cache is not None:
            cache.save(raw)

    filter_result = filter_ignored_packages(raw.packages, active_config)
    ignored_summary = None
    if filter_result.ignored_count > 0:
        ignored_summary = IgnoredPackagesSummary(
            ignored_count=filter_result.ignored_count,
            ignored_names=filter_result.ignored_names,
        )

    packages = apply_license_overrides(filter_result.packages, active_config)
    return aggregate(
        packages,
        policy=policy_from_config(active_config),
        include_types=active_config.include_types,
        ignored_summary=ignored_summary,
    )


def scan(
    root: Union[str, Path],
    config: Optional[AuditorConfig] = None,
    cache: Optional[ScanCache] = None,
    console: Optional[Console] = None,
    show_progress: bool = False,
    grammar: Optional[LicenseGrammarService] = None,
) -> ScanResult:
    """Synchronous wrapper around :func:`scan_async`.

    Must not be called from a running event loop.
    """
    return asyncio.run(
        scan_async(
            root,
            config=config,
            cache=cache,
            console=console,
            show_progress=show_progress,
            grammar=grammar,
        )
    )
