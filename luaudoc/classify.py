"""Path-based layer and feature classification."""

from __future__ import annotations

from typing import Sequence

from .config import DEFAULT_FEATURE
from .models import KNOWN_LAYERS, FeatureRule, Layer

_LAYERS_BY_NAME = {layer.value: layer for layer in KNOWN_LAYERS}


def resolve_layer(relative_path: str, source_dir: str = "src") -> Layer:
    """Return the layer named by the first segment below ``source_dir``.

    ``relative_path`` is repository-relative, e.g. ``src/Server/...`` or
    ``game/src/Client/...`` for a nested source root. Paths outside the
    source root, or whose segment is not a known layer, are ``UNCLASSIFIED``.
    """
    root = [segment for segment in source_dir.split("/") if segment]
    parts = relative_path.split("/")
    if len(parts) <= len(root) + 1 or parts[: len(root)] != root:
        return Layer.UNCLASSIFIED
    return _LAYERS_BY_NAME.get(parts[len(root)], Layer.UNCLASSIFIED)


def classify_feature(
    relative_path: str,
    rules: Sequence[FeatureRule],
    default: str = DEFAULT_FEATURE,
) -> str:
    """Return the key of the first rule matching ``relative_path``.

    Rule order is significant: a path matching several rules belongs to the
    earliest one. ``default`` applies when nothing matches.
    """
    for rule in rules:
        if rule.matches(relative_path):
            return rule.key
    return default


__all__ = ["classify_feature", "resolve_layer"]
