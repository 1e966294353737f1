"""Python pattern table."""

from __future__ import annotations

import re

from archlint.scanner.patterns import ImportPattern, LanguagePatterns


def python_patterns() -> LanguagePatterns:
    return LanguagePatterns(
        imports=(
            ImportPattern(re.compile(r"(?:^from\s+(\S+)\s+import|^import\s+(\S+))")),
        ),
        exports=(
            re.compile(r"^(?:def|class)\s+([A-Za-z]\w*)\s*[\(:]"),
            re.compile(r"^__all__\s*="),
        ),
        crypto=(
            re.compile(
                r"(?:from\s+cryptography|import\s+hashlib|import\s+hmac|from\s+Crypto"
                r"|bcrypt\.|passlib\.)",
                re.IGNORECASE,
            ),
        ),
        auth=(
            re.compile(
                r"def\s+\w*(?:auth|login|verify|validate_(?:token|jwt|password))\s*\(",
                re.IGNORECASE,
            ),
        ),
        handlers=(
            re.compile(r"def\s+\w*(?:view|handler|controller)\w*", re.IGNORECASE),
        ),
    )
