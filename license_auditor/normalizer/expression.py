"""Normalization of declared license values into canonical expressions.

Declared licenses come as plain strings, lists of strings or ``{"type": ...}``
objects, spelled every way imaginable. :func:`normalize_license` reduces them
to an SPDX-style expression such as ``"Apache-2.0 OR MIT"``, or ``UNKNOWN``.

Resolution is layered:

1. absent or empty values are ``UNKNOWN``;
2. lists are normalized item by item and joined with ``OR``, objects are
   replaced by their ``type``;
3. strings containing an ``OR``/``AND`` operator always use the heuristics,
   since the formal parser can lose an operand of free-text expressions;
4. single expressions are corrected and parsed when a parser is available;
5. otherwise each operand goes through the alias table, the corrector and the
   catalog, and is kept verbatim when nothing matches.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

from license_auditor.constants import UNKNOWN_LICENSE
from license_auditor.log import get_logger
from license_auditor.normalizer.grammar import (
    LicenseBranch,
    LicenseGrammarService,
    LicenseLeaf,
    get_grammar_service,
)

logger = get_logger(__name__)

# Common spellings checked before any other lookup
LICENSE_ALIASES: dict[str, str] = {
    "mit": "MIT",
    "isc": "ISC",
    "apache-2.0": "Apache-2.0",
    "apache": "Apache-2.0",
    "gpl": "GPL",
    "agpl": "AGPL",
    "lgpl": "LGPL",
}

_OPERATOR_PATTERN = re.compile(r"\s(OR|AND)\s", re.IGNORECASE)
_OPERATOR_SPLIT = re.compile(r"\s+(OR|AND)\s+", re.IGNORECASE)
_OPERATOR_TOKEN = re.compile(r"^(OR|AND)$", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def normalize_license(
    raw: Any,
    grammar: Optional[LicenseGrammarService] = None,
) -> str:
    """Normalize a declared license value into a canonical expression.

    Never raises: every failure degrades to a less canonical, non-empty string.

    Args:
        raw: A license string, a sequence of strings or objects, an object
            with a ``type`` key, or None.
        grammar: Grammar service to use. Defaults to the process-wide one.

    Returns:
        Canonical license expression, or ``UNKNOWN`` for absent values.
    """
    service = grammar if grammar is not None else get_grammar_service()
    try:
        return _normalize(raw, service)
    except Exception:  # pylint: disable=broad-exception-caught
        # Last resort: the heuristics alone cannot fail on a string
        logger.debug("License normalization failed for %r", raw, exc_info=True)
        return _heuristic(str(raw), None) or UNKNOWN_LICENSE


def _normalize(raw: Any, service: LicenseGrammarService) -> str:
    # None, False, 0 and empty containers all mean "no license declared"
    if raw is None or isinstance(raw, bool) or not raw:
        return UNKNOWN_LICENSE

    if isinstance(raw, (list, tuple)):
        if not raw:
            return UNKNOWN_LICENSE
        return " OR ".join(_normalize(item, service) for item in raw)

    if isinstance(raw, Mapping):
        if "type" not in raw:
            return UNKNOWN_LICENSE
        return _normalize(raw["type"], service)

    text = _WHITESPACE.sub(" ", str(raw)).strip()
    if not text:
        return UNKNOWN_LICENSE

    if _OPERATOR_PATTERN.search(text):
        return _heuristic(text, service)

    # bare family names must not be widened by the parser (gpl -> GPL-1.0-or-later)
    alias = LICENSE_ALIASES.get(text.lower())
    if alias is not None:
        return alias

    if service.has_parser:
        formal = _formal(text, service)
        if formal is not None:
            return formal

    return _heuristic(text, service)


def _formal(text: str, service: LicenseGrammarService) -> Optional[str]:
    corrected = service.correct(text)
    try:
        tree = service.parse(corrected)
    except ValueError as e:
        logger.debug("Formal parse rejected %r: %s", corrected, e)
        return None
    return serialize_tree(tree)


def serialize_tree(node: Any) -> str:
    """Render a parsed expression tree back into an expression string.

    Args:
        node: A LicenseLeaf, a LicenseBranch, or any other parser object.

    Returns:
        ``identifier`` for leaves, operands joined by the upper-cased
        conjunction for branches, ``str(node)`` for anything else.
    """
    if isinstance(node, LicenseLeaf):
        return node.identifier
    if isinstance(node, LicenseBranch) and node.children:
        separator = f" {node.conjunction.upper()} "
        return separator.join(serialize_tree(child) for child in node.children)
    return str(node)


def _heuristic(text: str, service: Optional[LicenseGrammarService]) -> str:
    text = _WHITESPACE.sub(" ", text).strip()
    if not text:
        return UNKNOWN_LICENSE
    parts = _OPERATOR_SPLIT.split(text)
    return " ".join(_normalize_token(part, service) for part in parts)


def _normalize_token(token: str, service: Optional[LicenseGrammarService]) -> str:
    if _OPERATOR_TOKEN.match(token):
        return token.upper()

    alias = LICENSE_ALIASES.get(token.lower())
    if alias is not None:
        return alias

    candidate = token.strip()
    if service is None:
        return candidate

    candidate = service.correct(candidate) or candidate
    match = service.lookup(candidate)
    return match if match is not None else candidate
