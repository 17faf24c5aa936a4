"""Optional license grammar services.

The normalizer improves its output when SPDX tooling is importable: a
spelling corrector (``packaging.licenses``), an expression parser
(``license_expression``) and a catalog of identifiers and human-readable
names (``spdx_license_list``). Each backend is optional on its own; when none
can be loaded the null service is used and normalization falls back to its
heuristics.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from license_auditor.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LicenseLeaf:
    """A single license identifier in a parsed expression."""

    identifier: str


@dataclass(frozen=True)
class LicenseBranch:
    """Operands joined by one conjunction (``and`` / ``or``)."""

    conjunction: str
    children: tuple[Any, ...] = field(default_factory=tuple)


class LicenseGrammarService(ABC):
    """Capabilities the normalizer can use when they are available."""

    @property
    @abstractmethod
    def has_parser(self) -> bool:
        """Whether :meth:`parse` can succeed at all."""

    @abstractmethod
    def correct(self, text: str) -> str:
        """Best-effort spelling correction. Returns ``text`` when unsure."""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse ``text`` into a tree of LicenseLeaf / LicenseBranch nodes.

        Raises:
            ValueError: If the expression cannot be parsed or names an
                unknown license.
        """

    @abstractmethod
    def lookup(self, token: str) -> Optional[str]:
        """Map an identifier or license name to its canonical identifier."""


class NullGrammarService(LicenseGrammarService):
    """Used when no grammar backend can be loaded."""

    @property
    def has_parser(self) -> bool:
        return False

    def correct(self, text: str) -> str:
        return text

    def parse(self, text: str) -> Any:
        raise ValueError("No license expression parser available")

    def lookup(self, token: str) -> Optional[str]:
        return None


class SpdxGrammarService(LicenseGrammarService):
    """Grammar service backed by the SPDX libraries that could be imported."""

    def __init__(
        self,
        corrector: Optional[Callable[[str], str]] = None,
        licensing: Any = None,
        catalog: Optional[dict[str, str]] = None,
    ) -> None:
        """Initialize from already-loaded backends.

        Args:
            corrector: Callable returning a canonical expression, raising
                ValueError on input it does not recognize.
            licensing: A ``license_expression.Licensing`` instance.
            catalog: Mapping of canonical identifier to human-readable name.
        """
        self._corrector = corrector
        self._licensing = licensing
        self._catalog = catalog or {}
        self._ids_by_lower = {key.lower(): key for key in self._catalog}
        self._ids_by_name = {
            name.lower(): key for key, name in self._catalog.items() if name
        }

    @classmethod
    def load(cls) -> SpdxGrammarService:
        """Import every backend that is installed.

        Returns:
            Service with whichever capabilities could be loaded.
        """
        corrector = None
        licensing = None
        catalog = None

        try:
            from packaging.licenses import canonicalize_license_expression

            corrector = canonicalize_license_expression
        except ImportError as e:
            logger.debug("License corrector unavailable: %s", e)

        try:
            from license_expression import get_spdx_licensing

            licensing = get_spdx_licensing()
        except (ImportError, OSError, ValueError) as e:
            logger.debug("License expression parser unavailable: %s", e)

        try:
            from spdx_license_list import LICENSES

            catalog = {key: lic.name for key, lic in LICENSES.items()}
        except ImportError as e:
            logger.debug("SPDX license catalog unavailable: %s", e)

        return cls(corrector=corrector, licensing=licensing, catalog=catalog)

    @property
    def is_empty(self) -> bool:
        """True when no backend at all was loaded."""
        return self._corrector is None and self._licensing is None and not self._catalog

    @property
    def has_parser(self) -> bool:
        return self._licensing is not None

    def correct(self, text: str) -> str:
        if self._corrector is None:
            return text
        try:
            return str(self._corrector(text)) or text
        except ValueError:
            # packaging's InvalidLicenseExpression is a ValueError
            return text

    def parse(self, text: str) -> Any:
        if self._licensing is None:
            raise ValueError("No license expression parser available")
        try:
            parsed = self._licensing.parse(text, validate=True)
        except Exception as e:
            raise ValueError(f"Cannot parse license expression {text!r}: {e}") from e
        if parsed is None:
            raise ValueError(f"Empty license expression {text!r}")
        return self._convert(parsed)

    def _convert(self, node: Any) -> Any:
        if isinstance(node, self._licensing.AND):
            return LicenseBranch("and", tuple(self._convert(a) for a in node.args))
        if isinstance(node, self._licensing.OR):
            return LicenseBranch("or", tuple(self._convert(a) for a in node.args))
        # WITH-exception symbols and anything else stay library objects
        if hasattr(node, "exception_symbol"):
            return node
        key = getattr(node, "key", None)
        if isinstance(key, str):
            return LicenseLeaf(key)
        return node

    def lookup(self, token: str) -> Optional[str]:
        if not self._catalog:
            return None
        candidate = token.strip()
        if candidate in self._catalog:
            return candidate
        lowered = candidate.lower()
        return self._ids_by_lower.get(lowered) or self._ids_by_name.get(lowered)


_service: Optional[LicenseGrammarService] = None
_service_lock = threading.Lock()


def get_grammar_service() -> LicenseGrammarService:
    """Return the process-wide grammar service, loading it on first use.

    The service is never torn down; it is read-only after construction and
    safe to share between threads.

    Returns:
        The SPDX-backed service, or the null service if nothing loaded.
    """
    global _service
    if _service is not None:
        return _service
    with _service_lock:
        if _service is None:
            spdx = SpdxGrammarService.load()
            if spdx.is_empty:
                logger.debug("No license grammar backend found, using heuristics")
                _service = NullGrammarService()
            else:
                _service = spdx
    return _service
