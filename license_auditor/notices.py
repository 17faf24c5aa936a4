"""Plain-text third-party notices built from a scan result."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from license_auditor.cache.scan_cache import FileScanCache
from license_auditor.exceptions import NoticeError
from license_auditor.log import get_logger
from license_auditor.models.scan import PackageRecord, ScanResult
from license_auditor.resolvers.manifest import read_manifest
from license_auditor.scanner import scan

logger = get_logger(__name__)

DEFAULT_OUTPUT = "THIRD-PARTY-NOTICES.txt"
DEFAULT_OUTPUT_PT_BR = "AVISOS-DE-TERCEIROS.pt-BR.txt"
UNSPECIFIED_LICENSE = "UNSPECIFIED"
SEPARATOR = "-" * 64

_LABELS = {
    "en": {
        "title": "THIRD-PARTY NOTICES",
        "project": "Project license",
        "intro": "This file lists third-party components included and their notices/licenses.",
        "generated": "Generated at",
        "notes": "Notes:",
        "note_auto": "- This file is generated automatically; do not edit manually.",
        "note_update": "- To update, run: license-auditor notices generate",
        "note_lang": "- Third-party license texts are reproduced in their original "
        "language to preserve legal validity.",
        "package": "Package",
        "licenses": "Licenses",
        "repository": "Repository",
        "license_start": "--- Start of license text ---",
        "license_end": "--- End of license text ---",
        "notice_start": "--- Start of NOTICE ---",
        "notice_end": "--- End of NOTICE ---",
    },
    "pt-BR": {
        "title": "AVISOS DE TERCEIROS",
        "project": "Licença do projeto",
        "intro": "Este arquivo lista componentes de terceiros incluídos e seus "
        "respectivos avisos/licenças.",
        "generated": "Gerado em",
        "notes": "Observações:",
        "note_auto": "- Este arquivo é gerado automaticamente; não edite manualmente.",
        "note_update": "- Para atualizar, execute: license-auditor notices generate --pt-br",
        "note_lang": "- Os textos de licença de terceiros são reproduzidos no idioma "
        "original para preservar validade jurídica.",
        "package": "Pacote",
        "licenses": "Licenças",
        "repository": "Repositório",
        "license_start": "--- Início do texto de licença ---",
        "license_end": "--- Fim do texto de licença ---",
        "notice_start": "--- Início do NOTICE ---",
        "notice_end": "--- Fim do NOTICE ---",
    },
}

_NEWLINES = re.compile(r"\r\n?")


@dataclass(frozen=True)
class NoticeReport:
    """Outcome of a notice generation run.

    Attributes:
        output: File the notices were written to.
        packages: Number of package blocks written.
    """

    output: Path
    packages: int


def _clean(text: Optional[str]) -> str:
    if not text:
        return ""
    return _NEWLINES.sub("\n", text).strip()


def render_header(
    project_name: str,
    project_license: str,
    pt_br: bool = False,
    generated_at: Optional[str] = None,
) -> str:
    """Render the notices file header.

    Args:
        project_name: Project identifier in ``name@version`` form.
        project_license: License declared by the project itself.
        pt_br: Render in Brazilian Portuguese.
        generated_at: Timestamp to print. Defaults to now (UTC).

    Returns:
        Header text ending with a blank line.
    """
    labels = _LABELS["pt-BR" if pt_br else "en"]
    timestamp = generated_at or datetime.now(timezone.utc).isoformat()
    return "\n".join(
        [
            labels["title"],
            "=" * 20,
            "",
            f"{project_name} - {labels['project']}: {project_license}",
            labels["intro"],
            f"{labels['generated']}: {timestamp}",
            "",
            labels["notes"],
            labels["note_auto"],
            labels["note_update"],
            labels["note_lang"],
            "",
        ]
    )


def render_package_block(record: PackageRecord, pt_br: bool = False) -> str:
    """Render the notice block of one package.

    Args:
        record: Resolved package record.
        pt_br: Render labels in Brazilian Portuguese.

    Returns:
        Block text, including license and NOTICE texts when present.
    """
    labels = _LABELS["pt-BR" if pt_br else "en"]
    lines = [
        SEPARATOR,
        f"{labels['package']}: {record.package_id}",
        f"{labels['licenses']}: {record.license}",
    ]
    if record.repository_url:
        lines.append(f"{labels['repository']}: {record.repository_url}")

    license_text = _clean(record.license_file_text)
    if license_text:
        lines += ["", labels["license_start"], license_text, labels["license_end"]]

    notice_text = _clean(record.notice_file_text)
    if notice_text:
        lines += ["", labels["notice_start"], notice_text, labels["notice_end"]]

    lines.append("")
    return "\n".join(lines)


def select_notice_packages(
    result: ScanResult,
    project_package: Optional[str] = None,
) -> list[PackageRecord]:
    """Pick the packages that need attribution, sorted by ``name@version``.

    Private packages, type-declaration packages and the project itself are
    left out.
    """
    selected = [
        record
        for record in result.packages
        if not record.is_private
        and not record.is_type_declaration
        and record.name != project_package
    ]
    return sorted(selected, key=lambda r: r.package_id)


def generate_notices(
    root: Union[str, Path],
    pt_br: bool = False,
    output: Optional[Union[str, Path]] = None,
    result: Optional[ScanResult] = None,
) -> NoticeReport:
    """Write the third-party notices file of a project.

    Args:
        root: Project root holding ``package.json`` and ``node_modules``.
        pt_br: Write the Brazilian Portuguese variant.
        output: Output file, relative to ``root`` unless absolute. Defaults to
            THIRD-PARTY-NOTICES.txt or AVISOS-DE-TERCEIROS.pt-BR.txt.
        result: Scan result to use. Defaults to the cached scan, or a fresh
            scan when the cache misses.

    Returns:
        NoticeReport with the output path and number of packages.

    Raises:
        NoticeError: If the project manifest is missing or the output file
            cannot be written.
        ScanError: If a fresh scan is needed and cannot be performed.
    """
    root_path = Path(root)
    manifest = read_manifest(root_path)
    if manifest is None:
        raise NoticeError(f"Cannot read project manifest in '{root_path}'")

    name = manifest.get("name") or root_path.resolve().name
    project_name = f"{name}@{manifest.get('version') or '0.0.0'}"
    project_license = manifest.get("license") or UNSPECIFIED_LICENSE

    if result is None:
        result = scan(root_path, cache=FileScanCache(root_path))

    records = select_notice_packages(result, project_package=name)
    parts = [render_header(project_name, str(project_license), pt_br)]
    parts.extend(render_package_block(record, pt_br) for record in records)

    if output is not None:
        out_path = Path(output)
        if not out_path.is_absolute():
            out_path = root_path / out_path
    else:
        out_path = root_path / (DEFAULT_OUTPUT_PT_BR if pt_br else DEFAULT_OUTPUT)

    try:
        out_path.write_text("\n".join(parts), encoding="utf-8")
    except OSError as e:
        raise NoticeError(f"Cannot write notices to '{out_path}': {e}") from e

    logger.info("Wrote notices for %d packages to %s", len(records), out_path)
    return NoticeReport(output=out_path, packages=len(records))
