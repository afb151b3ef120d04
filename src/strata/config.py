"""Configuration loading and management for Strata.

This module provides the layer table, platform-API list and scanning
options. Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.strata.toml)
    3. Project config (<root>/strata.toml)
    4. Explicit config file
    5. Environment variables (STRATA_* prefix)
    6. CLI overrides (passed as kwargs)

A project config describes layers as an array of tables:

    package_roots = ["pulse-js-framework"]

    [[layers]]
    name = "runtime"
    level = 0
    prefixes = ["runtime"]
    isolated = true

    [[layers]]
    name = "cli"
    level = 3
    prefixes = ["cli"]

Example:
    >>> config = load_config(top_n=5)
    >>> config.top_n
    5
    >>> [layer.name for layer in config.layers][:2]
    ['runtime', 'compiler']
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, StrataError
from .paths import normalize_path

Verbosity = Literal["quiet", "normal", "verbose"]

# Node built-in modules: the host capabilities a browser-facing layer must not touch.
NODE_BUILTIN_MODULES = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "test",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

DEFAULT_PLATFORM_APIS: tuple[str, ...] = (
    "fs",
    "path",
    "child_process",
    "os",
    "http",
    "https",
    "http2",
    "net",
    "tls",
    "dgram",
    "dns",
    "crypto",
    "module",
    "process",
    "readline",
    "stream",
    "url",
    "vm",
    "worker_threads",
    "cluster",
    "zlib",
)


@dataclass(frozen=True)
class LayerConfig:
    """One declared architectural layer.

    Attributes:
        name: Layer name, also the segment used by package-style imports
        level: Ordering level; lower is more foundational
        path_prefixes: Repo-relative directory prefixes owned by the layer
        isolated: Layer may not reference platform-only APIs
    """

    name: str
    level: int
    path_prefixes: tuple[str, ...] = ()
    isolated: bool = False

    def __post_init__(self) -> None:
        """Validate the layer and normalize its prefixes."""
        if not self.name or not self.name.strip():
            raise ValueError("layer name must not be empty")
        if not isinstance(self.level, int) or isinstance(self.level, bool):
            raise ValueError(f"layer '{self.name}' level must be an integer")
        if self.level < 0:
            raise ValueError(f"layer '{self.name}' level must be non-negative")

        prefixes = tuple(normalize_path(p) for p in self.path_prefixes)
        if not prefixes:
            raise ValueError(f"layer '{self.name}' needs at least one path prefix")
        if any(not p for p in prefixes):
            raise ValueError(f"layer '{self.name}' has an empty path prefix")
        object.__setattr__(self, "path_prefixes", prefixes)


DEFAULT_LAYERS: tuple[LayerConfig, ...] = (
    LayerConfig("runtime", 0, ("runtime",), isolated=True),
    LayerConfig("compiler", 1, ("compiler",)),
    LayerConfig("loader", 2, ("loader",)),
    LayerConfig("server", 2, ("server",)),
    LayerConfig("cli", 3, ("cli",)),
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a conformance run.

    All fields have defaults describing the framework's own layout. Users
    typically override the layer table in ``strata.toml``.

    Attributes:
        Architecture:
            layers: Declared layer table (declaration order breaks prefix ties)
            platform_apis: Module names treated as platform-only APIs
            platform_scheme: Scheme for prefixed platform imports ("node" -> "node:fs")
            package_roots: Published package names whose next segment names a layer

        Source set:
            source_dirs: Directories to scan (empty = first segment of every layer prefix)
            extensions: Scanned file types, also tried when resolving extensionless imports
            exclude_patterns: Glob patterns excluded from the source set
            max_file_size_mb: Files above this size are skipped

        Execution and output:
            workers: Parallel extraction threads (None = sequential)
            top_n: Rows shown in the coupling table
            verbosity: Logging verbosity level
    """

    layers: tuple[LayerConfig, ...] = DEFAULT_LAYERS
    platform_apis: tuple[str, ...] = DEFAULT_PLATFORM_APIS
    platform_scheme: str = "node"
    package_roots: tuple[str, ...] = ("pulse-js-framework", "pulse-framework")

    source_dirs: tuple[str, ...] = ()
    extensions: tuple[str, ...] = (".js", ".mjs", ".pulse")
    exclude_patterns: tuple[str, ...] = field(
        default_factory=lambda: (
            "*.test.js",
            "*.spec.js",
            "*.min.js",
            "*.bundle.js",
            "node_modules/*",
            "dist/*",
            "coverage/*",
            ".git/*",
        )
    )
    max_file_size_mb: float = 10.0

    workers: Optional[int] = None
    top_n: int = 15
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.layers:
            raise ValueError("at least one layer must be declared")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise ValueError(f"extension '{ext}' must start with '.'")
        if not self.platform_scheme or ":" in self.platform_scheme:
            raise ValueError("platform_scheme must be a bare name such as 'node'")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.top_n < 1:
            raise ValueError("top_n must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got '{self.verbosity}'")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def scan_dirs(self) -> tuple[str, ...]:
        """Directories walked by the source provider."""
        if self.source_dirs:
            return tuple(normalize_path(d) for d in self.source_dirs)
        roots: list[str] = []
        for layer in self.layers:
            for prefix in layer.path_prefixes:
                top = prefix.split("/")[0]
                if top not in roots:
                    roots.append(top)
        return tuple(roots)

    def layer(self, name: str) -> Optional[LayerConfig]:
        """Look up a declared layer by name (first declaration wins)."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None


_TUPLE_FIELDS = (
    "platform_apis",
    "package_roots",
    "source_dirs",
    "extensions",
    "exclude_patterns",
)


def load_config(
    config_file: Optional[Path] = None, root: Optional[Path] = None, **overrides
) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        root: Project root searched for ``strata.toml`` (default: cwd)
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        StrataError: If a config file is unreadable or missing
        InvalidConfigError: If the layer table is malformed
    """
    merged: dict = {}

    global_config = Path.home() / ".strata.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise StrataError(f"Invalid global config '{global_config}': {e}")

    project_config = (root or Path.cwd()) / "strata.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise StrataError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise StrataError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise StrataError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    layers = merged.pop("layers", None)
    if layers is not None:
        merged["layers"] = _parse_layers(layers)

    for name in _TUPLE_FIELDS:
        if name in merged:
            value = merged[name]
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise InvalidConfigError(name, value, "expected a list of strings")
            merged[name] = tuple(value)

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        # Unknown field or failed validation
        raise StrataError(f"Invalid configuration: {e}")


def _parse_layers(raw: Any) -> tuple[LayerConfig, ...]:
    """Build LayerConfig objects from ``[[layers]]`` tables."""
    if isinstance(raw, (list, tuple)) and all(isinstance(item, LayerConfig) for item in raw):
        return tuple(raw)
    if not isinstance(raw, list):
        raise InvalidConfigError("layers", raw, "expected an array of [[layers]] tables")

    layers: list[LayerConfig] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidConfigError(f"layers[{index}]", item, "expected a table")
        unknown = set(item) - {"name", "level", "prefixes", "path_prefixes", "isolated"}
        if unknown:
            raise InvalidConfigError(
                f"layers[{index}]", ", ".join(sorted(unknown)), "unknown layer keys"
            )
        prefixes = item.get("prefixes", item.get("path_prefixes", ()))
        if isinstance(prefixes, str):
            prefixes = [prefixes]
        isolated = item.get("isolated", False)
        if not isinstance(isolated, bool):
            raise InvalidConfigError(f"layers[{index}]", isolated, "isolated must be a boolean")
        try:
            layers.append(
                LayerConfig(
                    name=item.get("name", ""),
                    level=item.get("level", -1),
                    path_prefixes=tuple(prefixes),
                    isolated=isolated,
                )
            )
        except ValueError as e:
            raise InvalidConfigError(f"layers[{index}]", item.get("name", "?"), str(e))
    return tuple(layers)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from STRATA_* environment variables.

    Only scalar fields are read (e.g. STRATA_TOP_N, STRATA_WORKERS,
    STRATA_PLATFORM_SCHEME, STRATA_MAX_FILE_SIZE_MB, STRATA_VERBOSITY).

    Returns:
        Dict of field_name -> parsed_value for any STRATA_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"STRATA_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise StrataError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the field type is not settable from env

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Tuples (layers, prefixes, patterns) are config-file only
    if origin is tuple or type_hint is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        StrataError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise StrataError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
