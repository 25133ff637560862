"""Module export identifier resolution and public function extraction."""

from __future__ import annotations

import re
from typing import List

from ..models import FunctionDoc
from .comments import extract_doc_comment

_IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"
_MODULE_RETURN = re.compile(rf"\nreturn\s+({_IDENTIFIER})\s*\Z")
_FUNCTION = re.compile(
    rf"function\s+({_IDENTIFIER})\s*([.:])\s*({_IDENTIFIER})\s*\(([\s\S]*?)\)\s*(?::\s*([^\n]+))?"
)


def resolve_module_name(source: str, file_base: str) -> str:
    """Return the identifier the module returns, or a name derived from the file.

    Only a bare ``return <identifier>`` closing the file counts. The fallback
    replaces runs of non-word characters in ``file_base`` with ``_``.
    """
    match = _MODULE_RETURN.search(source)
    if match:
        return match.group(1)
    return re.sub(r"\W+", "_", file_base)


def normalize_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def extract_public_functions(source: str, module_name: str) -> List[FunctionDoc]:
    """Return functions declared on ``module_name`` in source order.

    Declarations owned by any other identifier are skipped; the owner must
    equal ``module_name`` exactly.
    """
    results: List[FunctionDoc] = []
    for match in _FUNCTION.finditer(source):
        owner, separator, name, raw_params, raw_return = match.groups()
        if owner != module_name:
            continue
        params = normalize_whitespace(raw_params or "")
        return_type = normalize_whitespace(raw_return or "")
        signature = f"function {owner}{separator}{name}({params})"
        if return_type:
            signature += f": {return_type}"
        results.append(
            FunctionDoc(
                name=name,
                signature=signature,
                docs=extract_doc_comment(source, match.start()),
            )
        )
    return results


def declared_owners(source: str) -> List[str]:
    """Return the distinct owner identifiers used in function declarations."""
    owners: List[str] = []
    for match in _FUNCTION.finditer(source):
        if match.group(1) not in owners:
            owners.append(match.group(1))
    return owners


__all__ = [
    "declared_owners",
    "extract_public_functions",
    "normalize_whitespace",
    "resolve_module_name",
]
