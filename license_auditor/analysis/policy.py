"""Classification policies deciding which packages are problematic."""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from license_auditor.constants import UNKNOWN_LICENSE
from license_auditor.models.config import AuditorConfig
from license_auditor.models.scan import PackageRecord

_TOKEN = re.compile(r"\(|\)|[^\s()]+")
_OPERATORS = ("OR", "AND")

UNKNOWN_REASON = "Unknown license"


class ClassificationPolicy(ABC):
    """Decides whether a package record is problematic."""

    @abstractmethod
    def evaluate(self, record: PackageRecord) -> Optional[str]:
        """Classify one record.

        Args:
            record: Resolved package record.

        Returns:
            The reason the package is problematic, or None if it is acceptable.
        """


class UnknownLicensePolicy(ClassificationPolicy):
    """Baseline policy: flag packages whose license could not be determined."""

    def evaluate(self, record: PackageRecord) -> Optional[str]:
        if record.license == UNKNOWN_LICENSE:
            return UNKNOWN_REASON
        return None


class AllowListPolicy(ClassificationPolicy):
    """Flag unknown licenses and expressions outside an allow-list.

    An expression listed verbatim is always accepted. Otherwise the
    expression is evaluated with parentheses honored: ``OR`` needs one
    acceptable alternative and ``AND`` needs every operand allowed, with
    ``AND`` binding tighter than ``OR``. Malformed expressions are rejected.
    """

    def __init__(self, allowed_licenses: Iterable[str]) -> None:
        self._allowed = {lic.strip() for lic in allowed_licenses if lic.strip()}

    @property
    def allowed(self) -> frozenset[str]:
        return frozenset(self._allowed)

    def evaluate(self, record: PackageRecord) -> Optional[str]:
        if record.license == UNKNOWN_LICENSE:
            return UNKNOWN_REASON
        if self.is_allowed(record.license):
            return None
        return f"License '{record.license}' not in allowed list"

    def is_allowed(self, expression: str) -> bool:
        """Check a canonical expression against the allow-list."""
        if expression in self._allowed:
            return True
        tokens = _TOKEN.findall(expression)
        try:
            allowed, pos = self._any_of(tokens, 0)
        except (IndexError, ValueError):
            return False
        return allowed and pos == len(tokens)

    def _any_of(self, tokens: list[str], pos: int) -> tuple[bool, int]:
        allowed, pos = self._all_of(tokens, pos)
        while pos < len(tokens) and tokens[pos] == "OR":
            right, pos = self._all_of(tokens, pos + 1)
            allowed = allowed or right
        return allowed, pos

    def _all_of(self, tokens: list[str], pos: int) -> tuple[bool, int]:
        allowed, pos = self._operand(tokens, pos)
        while pos < len(tokens) and tokens[pos] == "AND":
            right, pos = self._operand(tokens, pos + 1)
            allowed = allowed and right
        return allowed, pos

    def _operand(self, tokens: list[str], pos: int) -> tuple[bool, int]:
        if tokens[pos] == "(":
            allowed, pos = self._any_of(tokens, pos + 1)
            if tokens[pos] != ")":
                raise ValueError(f"expected ')' at token {pos}")
            return allowed, pos + 1

        # multi-word names and WITH exceptions form a single operand
        words = []
        while pos < len(tokens) and tokens[pos] not in ("(", ")") + _OPERATORS:
            words.append(tokens[pos])
            pos += 1
        if not words:
            raise ValueError(f"expected a license at token {pos}")
        return " ".join(words) in self._allowed, pos


def policy_from_config(config: Optional[AuditorConfig]) -> ClassificationPolicy:
    """Pick the classification policy configured for a project.

    Args:
        config: Loaded configuration, or None for defaults.

    Returns:
        AllowListPolicy when allowed_licenses is configured, else the baseline.
    """
    if config is not None and config.allowed_licenses is not None:
        return AllowListPolicy(config.allowed_licenses)
    return UnknownLicensePolicy()
