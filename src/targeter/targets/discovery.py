# src/targeter/targets/discovery.py
"""Infer target fragments from a source tree.

Discovery is best-effort: it reads entry files as plain text and classifies
them with the tables in `discovery_rules`. Anything that can't be classified
is left out of the result instead of raising.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from targeter.config.config_types import DiscoveredTargetFragment
from targeter.logs import getAppLogger
from targeter.utils import cast_hint, deep_merge

from . import discovery_rules as rules


@dataclass
class ExtractedStatements:
    """Statements found in a file, and the syntax generations that produced them."""

    generations: list[str] = field(default_factory=list)
    items: list[str] = field(default_factory=list)


def extract_statements(
    contents: str,
    table: tuple[rules.Rule, ...],
) -> ExtractedStatements:
    """Run every rule of ``table`` over ``contents``.

    Captures are lower-cased, trimmed and de-duplicated, keeping the order in
    which they were first found.
    """
    result = ExtractedStatements()
    for tag, pattern in table:
        if pattern.groups != 1:
            xmsg = f"Extraction pattern for {tag!r} must have exactly one group"
            raise ValueError(xmsg)
        found = False
        for match in pattern.finditer(contents):
            found = True
            item = match.group(1).lower().strip()
            if item not in result.items:
                result.items.append(item)
        if found and tag not in result.generations:
            result.generations.append(tag)
    return result


def parse_settings_comment(contents: str) -> dict[str, Any]:
    """Read the ``@targeter`` block comment of an entry file, if any.

    Example:
        /**
         * @targeter
         * type: browser
         * library: true
         */
        → {"type": "browser", "library": True}
    """
    match = rules.SETTINGS_COMMENT.search(contents)
    if not match:
        return {}

    settings: dict[str, Any] = {}
    for line in match.group(1).splitlines():
        line_match = rules.SETTINGS_LINE.match(line)
        if not line_match:
            continue
        name, value = line_match.groups()
        if value in ("true", "false"):
            settings[name] = value == "true"
        else:
            settings[name] = value
    return settings


class TargetDiscovery:
    """Find targets in a source directory.

    Args:
        project_name: name given to the target when the directory itself is
            the target (single-target layout).
        root: base for relative directories passed to `find`.
    """

    def __init__(self, project_name: str, root: Path | None = None) -> None:
        self.project_name = project_name
        self.root = root if root is not None else Path.cwd()

    def find(self, directory: str | Path) -> list[DiscoveredTargetFragment]:
        """Return the fragments found in ``directory``, in name order."""
        logger = getAppLogger()
        dirpath = self.root / directory
        targets: list[DiscoveredTargetFragment] = []
        if not dirpath.is_dir():
            logger.trace(f"[discovery] Nothing to inspect at {dirpath}")
            return targets

        try:
            items = self._get_items(dirpath)
        except OSError as e:
            logger.trace(f"[discovery] Can't list {dirpath}: {e}")
            return targets

        has_script = any(
            item.is_file() and rules.SCRIPT_FILE.search(item.name) for item in items
        )
        if has_script:
            candidates = [(self.project_name, dirpath, False)]
        else:
            candidates = [(item.name, item, True) for item in items if item.is_dir()]

        for name, path, has_folder in candidates:
            target = self._parse_target(name, path, has_folder=has_folder)
            if target is not None:
                logger.debug(
                    "Discovered %s target '%s' in %s", target["type"], name, path
                )
                targets.append(target)

        return targets

    def _get_items(self, directory: Path) -> list[Path]:
        return sorted(
            (
                item
                for item in directory.iterdir()
                if item.name.lower() not in rules.IGNORED_ITEMS
                and not item.name.startswith(".")
            ),
            key=lambda item: item.name,
        )

    def _parse_target(
        self,
        name: str,
        directory: Path,
        *,
        has_folder: bool = True,
    ) -> DiscoveredTargetFragment | None:
        logger = getAppLogger()
        target: dict[str, Any] = {
            "name": name,
            "has_folder": has_folder,
            "create_folder": has_folder,
            "entry": {
                "default": "index.js",
                "development": None,
                "production": None,
            },
        }

        try:
            items = self._get_items(directory)
        except OSError as e:
            logger.trace(f"[discovery] Can't list {directory}: {e}")
            return None

        scripts: dict[str, str] = {}
        for item in items:
            if item.is_file() and rules.SCRIPT_FILE.search(item.name):
                base = rules.SCRIPT_FILE.sub("", item.name).lower()
                scripts[base] = item.name

        if not scripts:
            logger.trace(f"[discovery] No script files in {directory}")
            return None

        entry = target["entry"]
        if len(scripts) == 1:
            entry["default"] = next(iter(scripts.values()))
        else:
            if rules.DEVELOPMENT_ENTRY in scripts:
                entry["development"] = scripts[rules.DEVELOPMENT_ENTRY]
            if rules.PRODUCTION_ENTRY in scripts:
                entry["production"] = scripts[rules.PRODUCTION_ENTRY]
            if rules.INDEX_ENTRY in scripts:
                entry["default"] = scripts[rules.INDEX_ENTRY]

        entry_path = directory / (entry["production"] or entry["default"])
        if not entry_path.is_file():
            logger.trace(f"[discovery] Entry file missing: {entry_path}")
            return None

        try:
            contents = entry_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.trace(f"[discovery] Can't read {entry_path}: {e}")
            return None

        info = self._analyze_entry(entry_path, contents)
        return cast_hint(DiscoveredTargetFragment, deep_merge(target, info))

    def _analyze_entry(self, entry_path: Path, contents: str) -> dict[str, Any]:
        comments = parse_settings_comment(contents)
        imports = extract_statements(contents, rules.IMPORT_RULES)
        exports = extract_statements(contents, rules.EXPORT_RULES)

        framework: str | None = comments.get("framework") or rules.first_match(
            rules.BROWSER_FRAMEWORKS, imports.items
        )
        library = bool(comments.get("library")) or (
            framework not in rules.BROWSER_FRAMEWORKS_WITH_EXPORTS
            and bool(exports.items)
        )

        is_browser = (
            comments.get("type") == "browser"
            or framework is not None
            or any(pattern.search(contents) for _tag, pattern in rules.BROWSER_EXPRESSIONS)
        )
        # server-render entry points run on node
        if rules.first_match(rules.NODE_FRAMEWORKS, imports.items):
            is_browser = False

        info: dict[str, Any] = {
            "type": "browser" if is_browser else "node",
            "library": library,
        }
        if framework:
            info["framework"] = framework
        elif not is_browser:
            if any(rules.ASSET_FILE.search(item) for item in imports.items):
                info["bundle"] = True
            elif "modern" in imports.generations or "modern" in exports.generations:
                info["transpile"] = True

        if is_browser and library:
            info["output"] = {
                "default": {"js": "[target-name].js"},
                "development": {"js": "[target-name].js"},
            }

        bundles = bool(info.get("bundle"))
        if rules.TYPESCRIPT_FILE.search(entry_path.name):
            info["type_script"] = True
            info["source_map"] = {"development": True, "production": True}
            if not is_browser and not bundles:
                info["transpile"] = True
            if framework is None and rules.TYPESCRIPT_REACT_FILE.search(entry_path.name):
                info["framework"] = "react"
        elif comments.get("flow") is True:
            info["flow"] = True
            if not is_browser and not bundles:
                info["transpile"] = True

        return info
