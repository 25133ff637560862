"""Whitespace normalisation applied to every generated page."""

from __future__ import annotations

from typing import List

_FENCE = "```"


def _is_fence(line: str) -> bool:
    return line.lstrip().startswith(_FENCE)


class MarkdownLinter:
    """Tidies prose lines; fenced blocks are copied through verbatim."""

    def lint(self, markdown: str) -> str:
        text = markdown.replace("\r\n", "\n").replace("\r", "\n")
        out: List[str] = []
        fence_open = False

        for raw in text.split("\n"):
            if fence_open:
                if _is_fence(raw):
                    fence_open = False
                    raw = raw.rstrip()
                out.append(raw)
                continue

            line = raw.rstrip()
            if _is_fence(line):
                fence_open = True
            elif not line:
                if not out or out[-1] == "":
                    continue
            elif line.startswith("#") and out and out[-1] != "":
                out.append("")
            out.append(line)

        while out and out[-1] == "":
            out.pop()
        return "\n".join(out) + "\n"


__all__ = ["MarkdownLinter"]
