"""Line-based extraction of ``export type`` declarations."""

from __future__ import annotations

import re
from typing import List

from ..models import ExportTypeDoc

_KEYWORD = "export type "
_TYPE_NAME = re.compile(r"^export type\s+([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE)


def extract_export_types(source: str) -> List[ExportTypeDoc]:
    """Return every exported type declaration with its full signature text.

    A declaration runs from its keyword line until the brace balance drops to
    zero or below after an ``=`` has been seen, or until end of file.
    """
    results: List[ExportTypeDoc] = []
    lines = source.split("\n")
    index = 0
    while index < len(lines):
        if not lines[index].lstrip().startswith(_KEYWORD):
            index += 1
            continue

        start = end = index
        balance = 0
        saw_equals = False
        while True:
            current = lines[end]
            balance += current.count("{") - current.count("}")
            if "=" in current:
                saw_equals = True
            if balance <= 0 and saw_equals:
                break
            end += 1
            if end >= len(lines) - 1:
                break

        snippet = "\n".join(lines[start : end + 1]).strip()
        match = _TYPE_NAME.search(snippet)
        name = match.group(1) if match else f"type_{len(results) + 1}"
        results.append(ExportTypeDoc(name=name, signature=snippet))
        index = end + 1
    return results


__all__ = ["extract_export_types"]
