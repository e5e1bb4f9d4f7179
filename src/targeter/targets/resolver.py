# src/targeter/targets/resolver.py
"""Resolve declared targets into their canonical, fully-populated shape.

Resolution of one target, in order:

 1. validate the type (``node`` or ``browser``, case-insensitive)
 2. compute the source and build folder names
 3. deep-merge: field defaults, type template, override, computed fields
 4. require an engine for browser and bundling targets
 5. fill ``entry`` environments from ``entry.default``
 6. fill ``output`` environments from ``output.default`` and snapshot it
 7. substitute ``[target-name]`` and ``[hash]`` in the output paths
 8. keep an explicit ``dot_env.files`` list verbatim
 9. fill ``html`` from ``html.default``
10. flag TypeScript (and React for ``.tsx``) from the entry extensions
11. force transpilation for typed targets
12. compute relative folders and absolute paths
13. run the ``target-load`` reducers
"""

import copy
import re
import time
from collections.abc import Callable, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

from targeter.config.config_loader import load_config
from targeter.config.config_types import (
    BrowserTargetConfiguration,
    CopyItem,
    PackageInfo,
    RawProjectSettings,
    RawTargetOverride,
    ResolvedTarget,
)
from targeter.constants import (
    BUILD_TYPES,
    DEFAULT_BUILD_DIR,
    DEFAULT_BUILD_TYPE,
    DEFAULT_SOURCE_DIR,
    DEFAULT_TARGET_TYPE,
    EVENT_PROJECT_FILES_TO_COPY,
    EVENT_TARGET_COPY_FILES,
    EVENT_TARGET_ENVIRONMENT_VARIABLES,
    EVENT_TARGET_LOAD,
    TARGET_TYPES,
)
from targeter.dotenv_loader import DotEnvLoader
from targeter.hooks import ReducerRegistry
from targeter.logs import getAppLogger
from targeter.utils import (
    cast_hint,
    deep_merge,
    fill_from_default,
    fill_from_default_deep,
    get_property_with_path,
    replace_placeholders,
)

from .browser_config import BrowserConfiguration


TYPE_PATTERN = re.compile(r"^(?:node|browser)$", re.IGNORECASE)
TYPESCRIPT_ENTRY = re.compile(r"\.tsx?$", re.IGNORECASE)
TYPESCRIPT_REACT_ENTRY = re.compile(r"\.tsx$", re.IGNORECASE)

# Fields every resolved target carries even when its template is sparse
TARGET_FIELD_DEFAULTS: dict[str, Any] = {
    "engine": None,
    "bundle": False,
    "transpile": False,
    "type_script": False,
    "flow": False,
    "library": False,
    "has_folder": True,
    "create_folder": False,
    "folder": "",
    "entry": {"default": None, "development": None, "production": None},
    "output": {"development": None, "production": None},
    "dot_env": {"enabled": False, "files": [], "extend": False, "overwrite": False},
    "copy": [],
}


def _normalize_entry(entry: Mapping[str, Any]) -> dict[str, Any]:
    filled = fill_from_default(entry)
    # a filename or None, never an empty string
    return {name: value or None for name, value in filled.items()}


def _normalize_output(output: Mapping[str, Any]) -> dict[str, Any]:
    filled = fill_from_default_deep(output)
    for build_type in BUILD_TYPES:
        if not isinstance(filled.get(build_type), dict):
            filled[build_type] = {}

    # every build type exposes the same keys
    all_keys: list[str] = []
    for build_type in BUILD_TYPES:
        all_keys.extend(k for k in filled[build_type] if k not in all_keys)
    for build_type in BUILD_TYPES:
        for key in all_keys:
            if key not in filled[build_type]:
                sibling = next(
                    filled[other][key]
                    for other in BUILD_TYPES
                    if key in filled[other]
                )
                filled[build_type][key] = copy.deepcopy(sibling)
    return filled


def _replace_output_placeholders(
    output: Mapping[str, Any],
    placeholders: Mapping[str, Any],
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for build_type, paths in output.items():
        result[build_type] = {
            prop: replace_placeholders(value, placeholders)
            if isinstance(value, str)
            else value
            for prop, value in paths.items()
        }
    return result


class TargetResolver:
    """Resolve and look up the project targets.

    Every declared target is resolved once, eagerly, when the resolver is
    created; afterwards lookups are read-only.

    Args:
        settings: the project settings (templates, targets and paths).
        root: project root; absolute target paths are built from it.
        package_info: host package metadata; its ``name`` decides the
            default target.
        hooks: reducers for ``target-load`` and the other extension points.
        dotenv: loader used by `load_target_dot_env_file`.
        now: clock used for the ``[hash]`` output placeholder, in seconds.
    """

    def __init__(  # noqa: PLR0913
        self,
        settings: RawProjectSettings,
        *,
        root: Path,
        package_info: PackageInfo | None = None,
        hooks: ReducerRegistry | None = None,
        dotenv: DotEnvLoader | None = None,
        now: Callable[[], float] | None = None,
    ) -> None:
        self.settings = settings
        self.root = root.resolve()
        self.package_info: PackageInfo = package_info or {}
        self.hooks = hooks if hooks is not None else ReducerRegistry()
        self.dotenv = dotenv if dotenv is not None else DotEnvLoader(self.root)
        self._now = now if now is not None else time.time
        self.targets: dict[str, ResolvedTarget] = {}
        self.load_targets()

    # ------------------------------------------------------------------ #
    # resolution
    # ------------------------------------------------------------------ #

    def load_targets(self) -> None:
        """Resolve every declared target, replacing any previous result.

        Raises:
            ValueError: a target has an invalid type, or needs bundling and
                has no build engine. Nothing is stored in that case.
        """
        logger = getAppLogger()
        declared = self.settings.get("targets") or {}
        logger.trace(f"[load_targets] Resolving {len(declared)} target(s)")

        # one hash per pass, shared by all the targets
        hash_value = int(self._now() * 1000)
        loaded: dict[str, ResolvedTarget] = {}
        for name, override in declared.items():
            loaded[name] = self._resolve_target(name, override or {}, hash_value)

        self.targets = loaded
        logger.debug("Loaded targets: %s", ", ".join(loaded) or "none")

    def _resolve_target(
        self,
        name: str,
        override: RawTargetOverride,
        hash_value: int,
    ) -> ResolvedTarget:
        logger = getAppLogger()
        paths = self.settings.get("paths") or {}
        templates = self.settings.get("targets_templates") or {}

        raw_type = override.get("type") or DEFAULT_TARGET_TYPE
        if not isinstance(raw_type, str) or not TYPE_PATTERN.match(raw_type):
            xmsg = f"Target {name} has an invalid type: {raw_type}"
            raise ValueError(xmsg)
        target_type = raw_type.lower()
        is_node = target_type == "node"
        template = templates.get(target_type) or {}

        merged = deep_merge(
            TARGET_FIELD_DEFAULTS,
            template,
            override,
            {
                "name": name,
                "type": target_type,
                "paths": {"source": "", "build": ""},
                "folders": {"source": "", "build": ""},
                "is": {"node": is_node, "browser": not is_node},
            },
        )

        source_folder_name = override.get("folder") or name
        build_folder_name = source_folder_name if override.get("create_folder") else ""

        if not merged["engine"] and (merged["is"]["browser"] or merged["bundle"]):
            xmsg = (
                f"The target '{name}' requires bundling, but there's "
                "no build engine plugin installed"
            )
            raise ValueError(xmsg)

        merged["entry"] = _normalize_entry(merged["entry"])
        merged["output"] = _normalize_output(merged["output"])
        merged["original_output"] = copy.deepcopy(merged["output"])
        merged["output"] = _replace_output_placeholders(
            merged["output"],
            {"target-name": name, "hash": hash_value},
        )

        # lists merge by index; an explicit list must be taken as-is
        override_files = (override.get("dot_env") or {}).get("files")
        if override_files:
            merged["dot_env"]["files"] = list(override_files)

        if merged.get("html"):
            merged["html"] = fill_from_default(merged["html"])

        if not merged["type_script"]:
            for entry_file in merged["entry"].values():
                if not entry_file or not TYPESCRIPT_ENTRY.search(entry_file):
                    continue
                merged["type_script"] = True
                if TYPESCRIPT_REACT_ENTRY.search(entry_file) and not merged.get(
                    "framework"
                ):
                    merged["framework"] = "react"
                break

        if not merged["transpile"] and (merged["flow"] or merged["type_script"]):
            merged["transpile"] = True

        source = paths.get("source") or DEFAULT_SOURCE_DIR
        build = paths.get("build") or DEFAULT_BUILD_DIR
        source_folder = (
            PurePosixPath(source, source_folder_name)
            if merged["has_folder"]
            else PurePosixPath(source)
        )
        build_folder = PurePosixPath(build, build_folder_name)
        merged["folders"] = {"source": str(source_folder), "build": str(build_folder)}
        merged["paths"] = {
            "source": str(self.root / source_folder),
            "build": str(self.root / build_folder),
        }

        logger.trace(
            f"[resolve_target] {name}: type={target_type}"
            f" source={merged['folders']['source']} build={merged['folders']['build']}"
        )
        target = cast_hint(ResolvedTarget, merged)
        return self.hooks.reduce(EVENT_TARGET_LOAD, target)

    # ------------------------------------------------------------------ #
    # lookups
    # ------------------------------------------------------------------ #

    def get_targets(self) -> dict[str, ResolvedTarget]:
        return self.targets

    def target_exists(self, name: str) -> bool:
        return name in self.targets

    def get_target(self, name: str) -> ResolvedTarget:
        target = self.targets.get(name)
        if target is None:
            xmsg = f"The required target doesn't exist: {name}"
            raise ValueError(xmsg)
        return target

    def get_default_target(self, target_type: str | None = None) -> ResolvedTarget:
        """Pick the target commands use when none is specified.

        The target named like the host package wins; otherwise the first one
        in alphabetical order.
        """
        if target_type and target_type not in TARGET_TYPES:
            xmsg = f"Invalid target type: {target_type}"
            raise ValueError(xmsg)

        if target_type:
            targets = {
                name: target
                for name, target in self.targets.items()
                if target["type"] == target_type
            }
        else:
            targets = self.targets

        names = sorted(targets)
        if not names:
            if target_type:
                xmsg = (
                    "The project doesn't have any targets of the required type:"
                    f" {target_type}"
                )
            else:
                xmsg = "The project doesn't have any targets"
            raise ValueError(xmsg)

        project_name = self.package_info.get("name")
        if project_name and project_name in targets:
            return targets[project_name]
        return targets[names[0]]

    def find_target_for_file(self, file: str | Path) -> ResolvedTarget:
        """Return the target whose source directory contains ``file``."""
        filepath = Path(file)
        if not filepath.is_absolute():
            filepath = self.root / filepath

        for target in self.targets.values():
            source = Path(target["paths"]["source"])
            if filepath == source or source in filepath.parents:
                return target

        xmsg = f"A target couldn't be found for the following file: {file}"
        raise ValueError(xmsg)

    def get_setting(self, setting_path: str) -> Any:
        """Read a ``/``-separated path from the project settings.

        Raises:
            KeyError: nothing is defined on that path.
        """
        return get_property_with_path(self.settings, setting_path)

    # ------------------------------------------------------------------ #
    # environment
    # ------------------------------------------------------------------ #

    def load_target_dot_env_file(
        self,
        target: ResolvedTarget,
        build_type: str = DEFAULT_BUILD_TYPE,
        inject: bool = True,  # noqa: FBT001, FBT002
    ) -> dict[str, str]:
        """Load the target's environment files and return their variables.

        File names may use ``[target-name]`` and ``[build-type]``. The result
        goes through the ``target-environment-variables`` reducers and, when
        ``inject`` is set, is written into the environment.
        """
        logger = getAppLogger()
        dot_env = target["dot_env"]
        if not dot_env.get("enabled") or not dot_env.get("files"):
            return {}

        files = [
            replace_placeholders(
                file, {"target-name": target["name"], "build-type": build_type}
            )
            for file in dot_env.get("files", [])
        ]
        parsed = self.dotenv.load(files, dot_env.get("extend", False))
        if not parsed.loaded:
            logger.debug("No environment files loaded for %s", target["name"])
            return {}

        variables = self.hooks.reduce(
            EVENT_TARGET_ENVIRONMENT_VARIABLES,
            parsed.variables,
            target,
            build_type,
        )
        if inject:
            self.dotenv.inject(variables, dot_env.get("overwrite", False))
        return variables

    # ------------------------------------------------------------------ #
    # copy lists
    # ------------------------------------------------------------------ #

    def get_files_to_copy(
        self,
        target: ResolvedTarget,
        build_type: str = DEFAULT_BUILD_TYPE,
    ) -> list[CopyItem]:
        """Build the ``{from, to}`` list of files copied next to a bundle.

        String items keep their basename at the build root; objects use
        their explicit ``from``/``to``.

        Raises:
            ValueError: the target doesn't bundle, or an item is malformed.
            FileNotFoundError: a source file doesn't exist.
        """
        if target["is"]["node"] and not target["bundle"]:
            xmsg = "Only targets that require bundling can copy files"
            raise ValueError(xmsg)

        source = Path(target["paths"]["source"])
        build = Path(target["paths"]["build"])
        items: list[CopyItem] = []
        for index, item in enumerate(target.get("copy") or []):
            if isinstance(item, str):
                items.append(
                    {"from": str(source / item), "to": str(build / Path(item).name)}
                )
            elif isinstance(item, Mapping) and "from" in item and "to" in item:
                items.append(
                    {"from": str(source / item["from"]), "to": str(build / item["to"])}
                )
            else:
                xmsg = (
                    f"The target '{target['name']}' has an invalid copy item"
                    f" #{index + 1}: {item!r}"
                )
                raise ValueError(xmsg)

        items = self.hooks.reduce(EVENT_TARGET_COPY_FILES, items, target, build_type)

        for item in items:
            if not Path(item["from"]).exists():
                xmsg = f"The file to copy doesn't exist: {item['from']}"
                raise FileNotFoundError(xmsg)
        return items

    def get_project_files_to_copy(self) -> list[CopyItem]:
        """Build the ``{from, to}`` list of project files copied to the build root.

        Items under ``node_modules/`` are moved to the private modules folder
        and the revision file is added when the version settings ask for it.
        """
        copy_settings = self.settings.get("copy") or {}
        if not copy_settings.get("enabled"):
            return []

        raw_items = copy_settings.get("items", [])
        if not isinstance(raw_items, list):
            xmsg = "The 'copy.items' setting is not a list"
            raise ValueError(xmsg)  # noqa: TRY004

        paths = self.settings.get("paths") or {}
        build = self.root / (paths.get("build") or DEFAULT_BUILD_DIR)
        private_modules = paths.get("private_modules") or "private"

        items: list[CopyItem] = []
        for index, item in enumerate(raw_items):
            if isinstance(item, str):
                destination = item
                if item.startswith("node_modules/"):
                    destination = f"{private_modules}/{item[len('node_modules/'):]}"
                items.append(
                    {"from": str(self.root / item), "to": str(build / destination)}
                )
            elif isinstance(item, Mapping) and "from" in item and "to" in item:
                items.append(
                    {"from": str(self.root / item["from"]), "to": str(build / item["to"])}
                )
            else:
                xmsg = f"Invalid project copy item #{index + 1}: {item!r}"
                raise ValueError(xmsg)

        revision = (self.settings.get("version") or {}).get("revision") or {}
        revision_file = revision.get("filename")
        if (
            revision.get("enabled")
            and revision.get("copy")
            and revision_file
            and (self.root / revision_file).is_file()
        ):
            items.append(
                {"from": str(self.root / revision_file), "to": str(build / revision_file)}
            )

        return self.hooks.reduce(EVENT_PROJECT_FILES_TO_COPY, items)

    # ------------------------------------------------------------------ #
    # browser configuration
    # ------------------------------------------------------------------ #

    def get_browser_target_configuration(
        self,
        target: ResolvedTarget,
    ) -> BrowserTargetConfiguration:
        """Build the app configuration of a browser target.

        Returns the merged configuration and every external file that was
        read for it, so collaborators can watch them.

        Raises:
            ValueError: the target is not a browser target.
        """
        if target["is"]["node"]:
            xmsg = (
                "Only browser targets can generate configuration on the building"
                " process"
            )
            raise ValueError(xmsg)

        result: BrowserTargetConfiguration = {"configuration": {}, "files": []}
        settings = target.get("configuration") or {}
        if not settings.get("enabled"):
            return result

        name = target["name"]
        configs_path = self.root / settings.get("path", "config")
        if settings.get("has_folder", False):
            configs_path = configs_path / name

        files: list[str] = []

        def load_and_track(filepath: Path) -> dict[str, Any]:
            files.append(str(filepath))
            if not filepath.is_file():
                xmsg = f"The configuration file doesn't exist: {filepath}"
                raise FileNotFoundError(xmsg)
            value = load_config(filepath)
            if callable(value):
                value = value()
            return dict(value or {})

        default_config = settings.get("default")
        if not default_config:
            default_file = replace_placeholders(
                settings.get("default_file", "[target-name].config.json"),
                {"target-name": name},
            )
            default_config = load_and_track(configs_path / default_file)

        filename_format = replace_placeholders(
            settings.get(
                "filename_format", "[target-name].[configuration-name].config.json"
            ),
            {"target-name": name, "configuration-name": "[name]"},
        )
        app_configuration = BrowserConfiguration(
            name,
            default_config,
            config_path=configs_path,
            filename_format=filename_format,
            environment_variable=settings.get("environment_variable", "CONFIG"),
            loader=load_and_track,
        )
        if settings.get("load_from_environment", False):
            app_configuration.load_from_environment()

        result["configuration"] = app_configuration.get_config()
        result["files"] = files
        return result
