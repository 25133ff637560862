"""Tree-sitter powered syntax validation for Luau modules."""

from __future__ import annotations

from typing import Optional

from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from ..logging import get_logger

_LANGUAGE = "luau"


class SyntaxValidator:
    """Reports whether a Luau source parses without recoverable errors."""

    def __init__(self, parser: Optional[Parser] = None) -> None:
        self._parser = parser
        self.logger = get_logger("syntax")

    def has_errors(self, source: str) -> bool:
        tree = self._get_parser().parse(source.encode("utf-8"))
        has_error = bool(tree.root_node.has_error)
        if has_error:
            self.logger.debug("tree-sitter reported recoverable errors")
        return has_error

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = get_parser(_LANGUAGE)
        return self._parser


__all__ = ["SyntaxValidator"]
