"""JavaScript/TypeScript pattern table.

TypeScript shares every matcher with JavaScript.
"""

from __future__ import annotations

import re

from archlint.scanner.patterns import ImportPattern, LanguagePatterns

# Only relative specifiers are kept: bare package names never point back
# into the workspace.
_JS_IMPORT = re.compile(
    r"""(?:(?:import\s+.*\s+from|require)\s*\(?\s*['"](\.[^'"]+)['"])"""
)

_JS_EXPORT = re.compile(
    r"(?:^export\s+(?:default\s+)?(?:function|class|const|let|var|interface|type|enum)"
    r"\s+(\w+)|^module\.exports)"
)


def javascript_patterns() -> LanguagePatterns:
    return LanguagePatterns(
        imports=(ImportPattern(_JS_IMPORT),),
        exports=(_JS_EXPORT,),
        crypto=(
            re.compile(
                r"""(?:require\s*\(\s*['"]crypto['"]|from\s+['"]crypto['"]|bcrypt|argon2"""
                r"|jsonwebtoken|jose)",
                re.IGNORECASE,
            ),
        ),
        auth=(
            re.compile(
                r"function\s+\w*(?:auth|login|verify|validate(?:Token|JWT|Password))\s*\(",
                re.IGNORECASE,
            ),
        ),
        handlers=(
            re.compile(r"function\s+\w*(?:Handler|Controller)\w*\s*\(", re.IGNORECASE),
        ),
    )
