"""Layer classification against the declared layer table.

A module belongs to the layer whose path prefix matches the most leading
segments of its path. Prefixes match whole segments only. When two layers
declare the same most-specific prefix the first declared layer wins; that
situation is reported by validate_layers() rather than at classification.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from ..config import NODE_BUILTIN_MODULES, LayerConfig
from ..paths import has_segment_prefix, path_segments


def classify(module_path: str, layers: Sequence[LayerConfig]) -> Optional[str]:
    """Map a module path to a layer name, or None when unclassified."""
    best: Optional[LayerConfig] = None
    best_depth = -1

    for layer in layers:
        for prefix in layer.path_prefixes:
            if not has_segment_prefix(module_path, prefix):
                continue
            depth = len(path_segments(prefix))
            # Strictly greater: earlier declarations keep ties
            if depth > best_depth:
                best = layer
                best_depth = depth

    return best.name if best is not None else None


def layer_levels(layers: Iterable[LayerConfig]) -> dict[str, int]:
    """Layer name -> level, first declaration wins for duplicate names."""
    levels: dict[str, int] = {}
    for layer in layers:
        levels.setdefault(layer.name, layer.level)
    return levels


def validate_layers(
    layers: Sequence[LayerConfig], platform_apis: Iterable[str] = ()
) -> list[str]:
    """Check the layer table and platform-API list for configuration problems.

    Returns human-readable warnings; never raises. Reported:
      - a prefix declared by more than one layer (names the declaration-order winner)
      - a layer name declared more than once
      - a platform API that is not a known Node built-in module
    """
    warnings: list[str] = []

    seen_names: set[str] = set()
    for layer in layers:
        if layer.name in seen_names:
            warnings.append(
                f"Layer '{layer.name}' is declared more than once; "
                "the first declaration is used"
            )
        seen_names.add(layer.name)

    owners: dict[str, list[str]] = {}
    for layer in layers:
        for prefix in layer.path_prefixes:
            names = owners.setdefault(prefix, [])
            if layer.name not in names:
                names.append(layer.name)
    for prefix, names in owners.items():
        if len(names) > 1:
            warnings.append(
                f"Prefix '{prefix}' is claimed by layers {', '.join(names)}; "
                f"'{names[0]}' wins by declaration order"
            )

    for name in platform_apis:
        base = name.split("/")[0]
        if base not in NODE_BUILTIN_MODULES:
            warnings.append(
                f"Platform API '{name}' is not a known platform module; "
                "it will still be matched"
            )

    return warnings
