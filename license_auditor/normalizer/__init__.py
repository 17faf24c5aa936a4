"""License expression normalization."""

from license_auditor.normalizer.expression import (
    LICENSE_ALIASES,
    normalize_license,
    serialize_tree,
)
from license_auditor.normalizer.grammar import (
    LicenseBranch,
    LicenseGrammarService,
    LicenseLeaf,
    NullGrammarService,
    SpdxGrammarService,
    get_grammar_service,
)

__all__ = [
    "LICENSE_ALIASES",
    "LicenseBranch",
    "LicenseGrammarService",
    "LicenseLeaf",
    "NullGrammarService",
    "SpdxGrammarService",
    "get_grammar_service",
    "normalize_license",
    "serialize_tree",
]
