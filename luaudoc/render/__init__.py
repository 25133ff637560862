"""Page renderers and markdown post-processing."""

from .lint import MarkdownLinter
from .pages import render_api_index, render_architecture, render_feature, render_scope

__all__ = [
    "MarkdownLinter",
    "render_api_index",
    "render_architecture",
    "render_feature",
    "render_scope",
]
