"""Structural extractors and the per-module analyzer that combines them."""

from __future__ import annotations

from pathlib import PurePosixPath

from ..logging import get_logger
from ..models import ModuleDoc
from .comments import extract_doc_comment
from .functions import declared_owners, extract_public_functions, resolve_module_name
from .syntax import SyntaxValidator
from .types import extract_export_types


class ModuleAnalyzer:
    """Builds a ModuleDoc from the source text of one file."""

    def __init__(self, validator: SyntaxValidator | None = None) -> None:
        self.validator = validator or SyntaxValidator()
        self.logger = get_logger("extractors")

    def analyze(self, source: str, relative_path: str, feature: str) -> ModuleDoc:
        module_name = resolve_module_name(source, PurePosixPath(relative_path).stem)
        functions = extract_public_functions(source, module_name)

        if not functions:
            others = [owner for owner in declared_owners(source) if owner != module_name]
            if others:
                self.logger.warning(
                    "%s: no functions owned by '%s'; declarations use %s",
                    relative_path,
                    module_name,
                    ", ".join(others),
                )

        return ModuleDoc(
            module_name=module_name,
            relative_path=relative_path,
            feature=feature,
            export_types=extract_export_types(source),
            functions=functions,
            has_parse_errors=self.validator.has_errors(source),
        )


__all__ = [
    "ModuleAnalyzer",
    "SyntaxValidator",
    "extract_doc_comment",
    "extract_export_types",
    "extract_public_functions",
    "resolve_module_name",
]
