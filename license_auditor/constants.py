"""Constants for license-auditor."""

# Exit codes
EXIT_SUCCESS = 0  # No problematic packages
EXIT_ISSUES = 1  # Problematic packages or missing disclaimers found
EXIT_ERROR = 2  # Command failed due to error

# Sentinel for a license that could not be determined
UNKNOWN_LICENSE = "UNKNOWN"

# Directory holding installed dependencies, relative to the project root
INSTALL_DIR_NAME = "node_modules"

# Manifest file read from every package directory
MANIFEST_FILE_NAME = "package.json"

# Packages under this scope only ship type declarations
TYPES_SCOPE_PREFIX = "@types/"

# Probed in order; the first existing file wins
LICENSE_FILE_NAMES = (
    "LICENSE",
    "LICENSE.md",
    "LICENSE.txt",
    "LICENCE",
    "LICENCE.md",
    "LICENCE.txt",
    "license",
    "license.md",
    "license.txt",
    "License",
    "License.md",
    "COPYING",
    "COPYING.md",
    "COPYING.txt",
)

NOTICE_FILE_NAMES = (
    "NOTICE",
    "NOTICE.txt",
    "NOTICE.md",
    "Notice",
    "notice",
    "notice.txt",
)

# Where scan results are cached for offline reuse
CACHE_DIR_NAME = ".license-auditor"
CACHE_FILE_NAME = "licenses.json"

LEGAL_DISCLAIMER = (
    "This tool provides license information for informational purposes only. "
    "It does not constitute legal advice. Consult a qualified attorney for "
    "legal guidance on license compliance."
)

LEGAL_DISCLAIMER_SHORT = (
    "This tool provides license information for informational purposes only. "
    "It does not constitute legal advice."
)
