"""Recover the documentation comment that precedes a declaration."""

from __future__ import annotations

import re

_BLOCK_END = re.compile(r"^\s*\](=*)\]\s*$")


def extract_doc_comment(source: str, offset: int) -> str:
    """Return the doc comment sitting directly above ``source[offset]``.

    Two styles are recognised: a long-bracket block (``--[[ ... ]]`` with any
    number of ``=`` signs) whose closing line is immediately above the
    declaration, or a run of ``--`` line comments. Anything else yields ``""``.
    """
    lines = source[:offset].split("\n")
    index = len(lines) - 1

    while index >= 0 and lines[index].strip() == "":
        index -= 1
    if index < 0:
        return ""

    block_end = _BLOCK_END.match(lines[index])
    if block_end:
        return _block_comment(lines, index, block_end.group(1))

    docs: list[str] = []
    while index >= 0 and lines[index].strip().startswith("--"):
        docs.insert(0, re.sub(r"^\s*--\s?", "", lines[index], count=1))
        index -= 1
    return "\n".join(docs).strip()


def _block_comment(lines: list[str], end_index: int, equals: str) -> str:
    opener = re.compile(rf"^\s*--\[{equals}\[\s*$")
    for index in range(end_index - 1, -1, -1):
        if opener.match(lines[index]):
            return "\n".join(lines[index + 1 : end_index]).strip()
    return ""


__all__ = ["extract_doc_comment"]
