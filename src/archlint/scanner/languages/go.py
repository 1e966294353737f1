"""Go pattern table."""

from __future__ import annotations

import re

from archlint.scanner.patterns import ImportPattern, LanguagePatterns


def go_patterns() -> LanguagePatterns:
    return LanguagePatterns(
        # Quoted path at the start of a line, as inside an import block
        imports=(ImportPattern(re.compile(r'^\s*"([^"]+)"')),),
        # Exported top-level identifiers start with an upper-case letter
        exports=(re.compile(r"^(?:func|type|var|const)\s+([A-Z]\w*)"),),
        crypto=(
            re.compile(
                r"(?:crypto/|golang\.org/x/crypto|bcrypt|argon2|hmac\.New|cipher\.|hash\.)",
                re.IGNORECASE,
            ),
        ),
        auth=(
            re.compile(
                r"func\s+\w*(?:Auth|Login|Verify|Validate(?:Token|JWT|Password))\s*\(",
                re.IGNORECASE,
            ),
        ),
        handlers=(
            re.compile(r"func\s+\w*(?:Handle|handler|Controller|Ctrl)\w*", re.IGNORECASE),
        ),
    )
