"""Reference resolution: raw specifier -> resolved target.

Resolution order:
  1. Relative (``./``, ``../``) and rooted (``/``) specifiers are joined to
     the referencing module's directory (rooted ones to the project root)
     and looked up in the source set, trying the literal path, each
     configured extension, then ``index`` files. Misses are Unresolved.
  2. ``<package-root>/<layer>/...`` names a layer directly -> CrossLayer.
  3. Platform APIs, bare (``fs``), as a subpath (``fs/promises``) or
     scheme-prefixed (``node:fs``) -> PlatformAPI.
  4. Anything else is External.
"""

import posixpath
from collections.abc import Collection, Sequence
from typing import Optional

from ..config import AnalysisConfig, LayerConfig
from .models import (
    CrossLayer,
    External,
    InternalModule,
    Module,
    PlatformAPI,
    RawReference,
    ResolvedTarget,
    Unresolved,
)


def is_relative(specifier: str) -> bool:
    return (
        specifier in (".", "..")
        or specifier.startswith("./")
        or specifier.startswith("../")
        or specifier.startswith("/")
    )


def resolve(
    ref: RawReference,
    source: Module,
    all_modules: Collection[str],
    layers: Sequence[LayerConfig],
    config: Optional[AnalysisConfig] = None,
) -> ResolvedTarget:
    """Resolve one raw reference made by ``source``."""
    config = config or AnalysisConfig()
    specifier = ref.specifier.strip()

    if is_relative(specifier):
        return _resolve_path(specifier, source.path, all_modules, config.extensions)

    layer = _cross_layer(specifier, layers, config.package_roots)
    if layer is not None:
        return CrossLayer(layer)

    api = _platform_api(specifier, config.platform_apis, config.platform_scheme)
    if api is not None:
        return PlatformAPI(api)

    return External(specifier)


def _resolve_path(
    specifier: str,
    source_path: str,
    all_modules: Collection[str],
    extensions: Sequence[str],
) -> ResolvedTarget:
    if specifier.startswith("/"):
        joined = specifier.lstrip("/")
    else:
        joined = posixpath.join(posixpath.dirname(source_path), specifier)
    candidate = posixpath.normpath(joined) if joined else "."

    # Escapes the project root
    if candidate == ".." or candidate.startswith("../"):
        return Unresolved(specifier)

    for path in _candidates(candidate, extensions):
        if path in all_modules:
            return InternalModule(path)
    return Unresolved(specifier)


def _candidates(base: str, extensions: Sequence[str]) -> list[str]:
    candidates: list[str] = []
    if base != ".":
        candidates.append(base)
        candidates.extend(base + ext for ext in extensions)
    index = "index" if base == "." else f"{base}/index"
    candidates.extend(index + ext for ext in extensions)
    return candidates


def _cross_layer(
    specifier: str, layers: Sequence[LayerConfig], package_roots: Sequence[str]
) -> Optional[str]:
    parts = specifier.split("/")
    # Scoped packages: @scope/name/<layer>
    root_len = 2 if specifier.startswith("@") else 1
    if len(parts) <= root_len:
        return None
    root = "/".join(parts[:root_len])
    if root not in package_roots:
        return None

    segment = parts[root_len]
    for layer in layers:
        if layer.name == segment:
            return layer.name
    return None


def _platform_api(
    specifier: str, platform_apis: Sequence[str], scheme: str
) -> Optional[str]:
    name = specifier
    prefix = f"{scheme}:"
    if name.startswith(prefix):
        name = name[len(prefix):]

    if name in platform_apis:
        return name
    base = name.split("/")[0]
    if base in platform_apis:
        return base
    return None
