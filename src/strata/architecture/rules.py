"""Rule evaluation over resolved references.

Two independent rule families:
- layer-order: a module may depend on its own level or lower, never higher
- platform-isolation: modules in an isolated layer may not use platform APIs

Both walk every reference and emit one violation per offending reference,
in input order. Sorting for display is the report assembler's job.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from ..config import LayerConfig
from .layers import layer_levels
from .models import (
    CrossLayer,
    InternalModule,
    PlatformAPI,
    ResolvedReference,
    RuleId,
    Violation,
)


def target_layer(
    ref: ResolvedReference, module_layers: Mapping[str, Optional[str]]
) -> Optional[str]:
    """Layer a reference points into, if it points into one."""
    if isinstance(ref.target, InternalModule):
        return module_layers.get(ref.target.path)
    if isinstance(ref.target, CrossLayer):
        return ref.target.layer
    return None


def detect_layer_order_violations(
    resolved: Sequence[ResolvedReference],
    module_layers: Mapping[str, Optional[str]],
    layers: Sequence[LayerConfig],
) -> list[Violation]:
    """Flag references from a lower (more foundational) layer to a higher one.

    Args:
        resolved: All resolved references
        module_layers: Canonical module path -> classified layer name
        layers: Declared layer table

    Returns:
        Violations in input order
    """
    levels = layer_levels(layers)
    violations: list[Violation] = []

    for ref in resolved:
        source_layer = ref.source.layer
        dest_layer = target_layer(ref, module_layers)
        if source_layer is None or dest_layer is None:
            continue
        if source_layer not in levels or dest_layer not in levels:
            continue

        source_level = levels[source_layer]
        dest_level = levels[dest_layer]
        if source_level < dest_level:
            if isinstance(ref.target, InternalModule):
                what = ref.target.path
            else:
                what = f"layer '{dest_layer}'"
            violations.append(
                Violation(
                    module=ref.source.path,
                    reference=ref.specifier,
                    rule_id=RuleId.LAYER_ORDER,
                    target_layer=dest_layer,
                    message=(
                        f"{source_layer} (level {source_level}) must not depend on "
                        f"{what} in {dest_layer} (level {dest_level})"
                    ),
                )
            )

    return violations


def detect_platform_violations(
    resolved: Sequence[ResolvedReference],
    layers: Sequence[LayerConfig],
) -> list[Violation]:
    """Flag platform-API references made from isolated layers."""
    isolated = {layer.name for layer in layers if layer.isolated}
    violations: list[Violation] = []

    for ref in resolved:
        if not isinstance(ref.target, PlatformAPI):
            continue
        if ref.source.layer is None or ref.source.layer not in isolated:
            continue
        violations.append(
            Violation(
                module=ref.source.path,
                reference=ref.specifier,
                rule_id=RuleId.PLATFORM_ISOLATION,
                target_layer=None,
                message=(
                    f"isolated layer '{ref.source.layer}' must not use "
                    f"platform API '{ref.target.name}'"
                ),
            )
        )

    return violations


def detect_violations(
    resolved: Sequence[ResolvedReference],
    module_layers: Mapping[str, Optional[str]],
    layers: Sequence[LayerConfig],
) -> list[Violation]:
    """Run both rule families; layer-order results come first."""
    return detect_layer_order_violations(
        resolved, module_layers, layers
    ) + detect_platform_violations(resolved, layers)
