# src/targeter/targets/discovery_rules.py
"""Ordered ``(tag, pattern)`` tables used to classify discovered targets.

Rows are evaluated in order and the first match wins wherever a single
answer is needed. Extraction patterns must have exactly one capturing group.
"""

import re


Rule = tuple[str, re.Pattern[str]]


# --- files -----------------------------------------------------------------

IGNORED_ITEMS: frozenset[str] = frozenset({".", "..", "thumbs.db", ".ds_store"})

SCRIPT_FILE = re.compile(r"\.[jt]sx?$", re.IGNORECASE)
TYPESCRIPT_FILE = re.compile(r"\.tsx?$", re.IGNORECASE)
TYPESCRIPT_REACT_FILE = re.compile(r"\.tsx$", re.IGNORECASE)
ASSET_FILE = re.compile(
    r"\.(png|jpe?g|gif|s?css|html|svg|woff2?|ttf|eot)$", re.IGNORECASE
)

# base names (lower-cased, extension-less) of environment specific entries
DEVELOPMENT_ENTRY = "index.development"
PRODUCTION_ENTRY = "index.production"
INDEX_ENTRY = "index"


# --- statements ------------------------------------------------------------

# `legacy` covers CommonJS, `modern` covers ES modules
IMPORT_RULES: tuple[Rule, ...] = (
    ("legacy", re.compile(r"""\s*require\s*\(\s*['"](.*?)['"]\s*\)""", re.IGNORECASE)),
    ("modern", re.compile(r"""\s*from\s*['"](.*?)['"]""", re.IGNORECASE)),
    ("modern", re.compile(r"""\s*import\s*\(\s*['"](.*?)['"]\s*\)""", re.IGNORECASE)),
    ("modern", re.compile(r"""(?:^|\s)import\s*['"](.*?)['"]""", re.IGNORECASE)),
)

EXPORT_RULES: tuple[Rule, ...] = (
    ("legacy", re.compile(r"(?:^|\s)(module\.exports\s*=)", re.IGNORECASE)),
    ("legacy", re.compile(r"(?:^|\s)(exports\.\w+\s*=)", re.IGNORECASE)),
    ("modern", re.compile(r"(?:^|\s)(export(?:\s+default)?)\b", re.IGNORECASE)),
)


# --- frameworks ------------------------------------------------------------

BROWSER_FRAMEWORKS: tuple[Rule, ...] = (
    ("angular", re.compile(r"@angular(?:/\w+)?$", re.IGNORECASE)),
    ("angularjs", re.compile(r"angular", re.IGNORECASE)),
    ("react", re.compile(r"react(?!-dom/server)", re.IGNORECASE)),
    ("aurelia", re.compile(r"aurelia", re.IGNORECASE)),
)

# Frameworks whose entry files export by convention, so exporting doesn't
# make the target a library.
BROWSER_FRAMEWORKS_WITH_EXPORTS: frozenset[str] = frozenset({"aurelia"})

# Server side entry points of browser frameworks; a match means the target
# runs on node even though it imports a browser framework.
NODE_FRAMEWORKS: tuple[Rule, ...] = (
    ("react", re.compile(r"react-dom/server", re.IGNORECASE)),
)

BROWSER_EXPRESSIONS: tuple[Rule, ...] = (
    (
        "dom-query",
        re.compile(
            r"(?:^|\s|=)doc(?:ument)?\s*\.\s*"
            r"(?:getElementBy(?:Id|ClassName)|getElementsBy(?:ClassName|TagName)"
            r"|querySelector(?:All)?)\s*\(",
            re.IGNORECASE,
        ),
    ),
    ("global-object", re.compile(r"(?:^|\s|=|\()(?:window|global)\s*\.", re.IGNORECASE)),
    ("fetch-polyfill", re.compile(r"""['"]whatwg-fetch['"]""", re.IGNORECASE)),
)


# --- settings comment ------------------------------------------------------

SETTINGS_COMMENT = re.compile(r"/\*\*\s*\n\s*\*\s*@targeter\s*\n([\s\S]*?)\n\s*\*/")
SETTINGS_LINE = re.compile(r"^\s*\*\s*(\w+)\s*:\s*(.*?)\s*$")


def first_match(rules: tuple[Rule, ...], values: list[str]) -> str | None:
    """Return the tag of the first rule matching any of ``values``."""
    for tag, pattern in rules:
        if any(pattern.search(value) for value in values):
            return tag
    return None
