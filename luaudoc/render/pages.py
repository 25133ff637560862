"""Markdown renderers for the generated documentation pages."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Sequence

from ..models import KNOWN_LAYERS, ApiScope, FeatureRule, Layer, ModuleDoc, SourceFile
from .lint import MarkdownLinter

_FEATURE_LAYER_ORDER: tuple[Layer, ...] = (
    Layer.SERVER,
    Layer.CLIENT,
    Layer.SHARED,
    Layer.NETWORK,
)

_LAYER_ROLES: Mapping[Layer, str] = {
    Layer.CLIENT: "UI/controllers and local gameplay presentation",
    Layer.SERVER: "simulation state, services, and persistence-facing logic",
    Layer.SHARED: "common definitions/utilities used by both runtimes",
    Layer.NETWORK: "packet contracts that bridge client and server",
}

_linter = MarkdownLinter()


def _front_matter(title: str) -> List[str]:
    return ["---", f"title: {title}", "---", ""]


def _finish(lines: Iterable[str]) -> str:
    return _linter.lint("\n".join(lines))


def render_architecture(
    files_by_layer: Mapping[Layer, Sequence[SourceFile]],
    *,
    source_dir: str = "src",
) -> str:
    """Render the architecture overview with per-layer file counts."""
    lines = _front_matter("Overview")
    lines.extend(
        [
            "# Architecture Overview",
            "",
            f"Generated from current `{source_dir}/` layout.",
            "",
            "## Runtime Boundaries",
            "",
            "```mermaid",
            "graph TD",
            "  Client[Client Runtime] -->|Packets| Network[Network Contracts]",
            "  Server[Server Runtime] -->|Packets| Network",
            "  Client --> Shared[Shared Modules]",
            "  Server --> Shared",
            "```",
            "",
            "## Layer Inventory",
            "",
        ]
    )
    for layer in KNOWN_LAYERS:
        count = len(files_by_layer.get(layer, ()))
        lines.append(f"- **{layer.value}**: {count} Luau files")
    unclassified = len(files_by_layer.get(Layer.UNCLASSIFIED, ()))
    if unclassified:
        lines.append(f"- **{Layer.UNCLASSIFIED.value}**: {unclassified} Luau files")
    lines.extend(["", "## Key Roots", ""])
    for layer in KNOWN_LAYERS:
        lines.append(f"- `{source_dir}/{layer.value}/` for {_LAYER_ROLES[layer]}")
    return _finish(lines)


def render_feature(feature: FeatureRule, files: Sequence[SourceFile]) -> str:
    """Render one feature inventory page grouped by layer."""
    grouped: dict[Layer, List[str]] = {layer: [] for layer in Layer}
    for source in files:
        grouped[source.layer].append(source.relative_path)

    lines = _front_matter(feature.key)
    lines.extend(
        [
            f"# {feature.key}",
            "",
            feature.description,
            "",
            f"Total files: **{len(files)}**",
            "",
            "```mermaid",
            "graph LR",
            f"  A[{feature.key}] --> C[Client]",
            "  A --> S[Server]",
            "  A --> SH[Shared]",
            "  A --> N[Network]",
            "```",
            "",
        ]
    )

    layers = list(_FEATURE_LAYER_ORDER)
    if grouped[Layer.UNCLASSIFIED]:
        layers.append(Layer.UNCLASSIFIED)
    for layer in layers:
        lines.extend([f"## {layer.value}", ""])
        paths = sorted(grouped[layer])
        if not paths:
            lines.extend(["_No files currently mapped._", ""])
            continue
        lines.extend(f"- `{path}`" for path in paths)
        lines.append("")
    return _finish(lines)


def _module_section(module: ModuleDoc) -> List[str]:
    status = "tree-sitter parse has recoverable errors" if module.has_parse_errors else "ok"
    lines = [
        f"## {module.module_name}",
        "",
        f"- Source: `{module.relative_path}`",
        f"- Feature area: `{module.feature}`",
        f"- Parse status: `{status}`",
        "",
    ]

    if module.export_types:
        lines.extend(["### Exported Types", ""])
        for type_doc in module.export_types:
            lines.extend([f"#### {type_doc.name}", "", "```luau", type_doc.signature, "```", ""])

    lines.extend(["### Public Functions", ""])
    if not module.functions:
        lines.extend(["_No module-scoped public functions detected._", ""])
        return lines

    for function in module.functions:
        lines.extend([f"#### {function.name}", "", "```luau", function.signature, "```"])
        if function.docs:
            lines.extend(["", "```text", function.docs, "```"])
        lines.append("")
    return lines


def render_scope(scope: ApiScope, modules: Sequence[ModuleDoc]) -> str:
    """Render the API reference page for one scope."""
    lines = _front_matter(scope.title)
    lines.extend([f"# {scope.title}", "", f"Generated modules: **{len(modules)}**", ""])
    for module in modules:
        lines.extend(_module_section(module))
    return _finish(lines)


def render_api_index(scopes: Sequence[ApiScope]) -> str:
    """Render the index linking every scope page in declared order."""
    lines = _front_matter("API Index")
    lines.extend(
        [
            "# API Index",
            "",
            "The following pages are generated from public Luau module APIs.",
            "",
        ]
    )
    lines.extend(f"- [{scope.title}](./{scope.key})" for scope in scopes)
    return _finish(lines)


__all__ = [
    "render_api_index",
    "render_architecture",
    "render_feature",
    "render_scope",
]
