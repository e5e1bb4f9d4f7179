# src/targeter/config/config_types.py


from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired


TargetType = Literal["node", "browser"]
BuildType = Literal["development", "production"]


# Copy entries use a reserved word as key, hence the functional syntax
CopyItem = TypedDict("CopyItem", {"from": str, "to": str})


class EntrySettings(TypedDict, total=False):
    default: str | None  # fallback for any environment left as None
    development: str | None
    production: str | None


class OutputPaths(TypedDict, total=False):
    js: str
    fonts: str
    css: str
    images: str


class OutputSettings(TypedDict, total=False):
    default: OutputPaths | None
    development: OutputPaths | None
    production: OutputPaths | None


class BuildTypeFlags(TypedDict, total=False):
    development: bool
    production: bool


class HtmlSettings(TypedDict, total=False):
    default: str | None
    template: str | None
    filename: str | None


class DotEnvSettings(TypedDict, total=False):
    enabled: bool
    files: list[str]  # may contain [target-name] and [build-type]
    extend: bool  # load every existing file, not only the first one
    overwrite: bool  # replace variables already on the environment


class BrowserConfigurationSettings(TypedDict, total=False):
    enabled: bool
    default: dict[str, Any] | None  # inline default configuration
    path: str  # folder, relative to the project root
    has_folder: bool  # look inside <path>/<target-name>/
    define_on: str
    environment_variable: str
    load_from_environment: bool
    filename_format: str  # [target-name] and [configuration-name]
    default_file: str  # used when `default` is empty


class TargetTemplate(TypedDict, total=False):
    type: str
    engine: str | None
    bundle: bool
    transpile: bool
    has_folder: bool
    create_folder: bool
    folder: str
    entry: EntrySettings
    output: OutputSettings
    source_map: BuildTypeFlags
    watch: BuildTypeFlags
    html: HtmlSettings  # browser only
    dot_env: DotEnvSettings
    configuration: BrowserConfigurationSettings  # browser only
    flow: bool
    type_script: bool
    library: bool
    framework: str | None
    clean_before_build: bool
    run_on_development: bool
    copy: list[str | CopyItem]


class RawTargetOverride(TargetTemplate, total=False):
    """User-declared partial settings for one target."""


class ProjectPaths(TypedDict, total=False):
    source: str
    build: str
    config: str
    private_modules: str  # destination of copied node_modules items


class TargetsTemplates(TypedDict, total=False):
    node: TargetTemplate
    browser: TargetTemplate


class CopyOnBuildSettings(TypedDict, total=False):
    enabled: bool
    only_on_production: bool
    targets: list[str]


class ProjectCopySettings(TypedDict, total=False):
    enabled: bool
    items: list[str | CopyItem]
    copy_on_build: CopyOnBuildSettings


class VersionSettings(TypedDict, total=False):
    define_on: str
    environment_variable: str
    revision: dict[str, Any]


class FindTargetsSettings(TypedDict, total=False):
    enabled: bool


class OthersSettings(TypedDict, total=False):
    find_targets: FindTargetsSettings
    watch: dict[str, Any]


class RawProjectSettings(TypedDict, total=False):
    paths: ProjectPaths
    targets_templates: TargetsTemplates
    targets: dict[str, RawTargetOverride]
    copy: ProjectCopySettings
    version: VersionSettings
    others: OthersSettings
    strict_config: bool


class PackageInfo(TypedDict, total=False):
    name: str
    version: str


# --- resolved shapes ------------------------------------------------------


class TargetFlags(TypedDict):
    node: bool
    browser: bool


class ResolvedEntry(TypedDict):
    development: str | None
    production: str | None


class ResolvedOutput(TypedDict):
    development: dict[str, Any]
    production: dict[str, Any]


class TargetLocations(TypedDict):
    source: str
    build: str


class ResolvedHtml(TypedDict):
    template: str | None
    filename: str | None


# `is` is a reserved word, hence the functional syntax
ResolvedTarget = TypedDict(
    "ResolvedTarget",
    {
        "name": str,
        "type": TargetType,
        "is": TargetFlags,
        "entry": ResolvedEntry,
        "output": ResolvedOutput,
        "original_output": ResolvedOutput,
        "paths": TargetLocations,  # absolute
        "folders": TargetLocations,  # relative to the project root
        "html": NotRequired[ResolvedHtml],
        "dot_env": DotEnvSettings,
        "configuration": NotRequired[BrowserConfigurationSettings],
        "transpile": bool,
        "bundle": bool,
        "type_script": bool,
        "flow": bool,
        "library": bool,
        "framework": NotRequired[str | None],
        "engine": str | None,
        "has_folder": bool,
        "create_folder": bool,
        "copy": list[str | CopyItem],
    },
)


class DiscoveredTargetFragment(TypedDict, total=False):
    name: str
    has_folder: bool
    create_folder: bool
    entry: EntrySettings
    type: TargetType
    library: bool
    framework: str
    transpile: bool
    bundle: bool
    output: OutputSettings
    type_script: bool
    flow: bool
    source_map: BuildTypeFlags


class BrowserTargetConfiguration(TypedDict):
    configuration: dict[str, Any]
    files: list[str]  # every external file consulted
