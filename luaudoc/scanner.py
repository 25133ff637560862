"""Source discovery and scope glob matching."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import List

from .classify import classify_feature, resolve_layer
from .config import DocsConfig
from .models import SourceFile
from .storage import Storage


def relative_path(path: Path, repo_root: Path) -> str:
    """Return ``path`` relative to ``repo_root`` using forward slashes."""
    return path.relative_to(repo_root).as_posix()


class SourceCollector:
    """Enumerates source files under the analysis root in a stable order."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    async def collect(self, config: DocsConfig) -> List[Path]:
        """Return sorted absolute paths of every source file below the source root."""
        source_root = config.source_root
        if not await self._storage.exists(source_root):
            raise FileNotFoundError(f"Source root not found: {source_root}")
        if not await self._storage.is_dir(source_root):
            raise NotADirectoryError(f"Source root is not a directory: {source_root}")

        files = await self._storage.list_files(source_root)
        matching = [path for path in files if path.name.endswith(config.extension)]
        return sorted(matching, key=lambda path: path.as_posix())

    async def scan(self, config: DocsConfig) -> List[SourceFile]:
        """Collect and classify every source file."""
        sources: List[SourceFile] = []
        for path in await self.collect(config):
            rel_path = relative_path(path, config.root)
            sources.append(
                SourceFile(
                    path=str(path),
                    relative_path=rel_path,
                    layer=resolve_layer(rel_path, config.source_dir),
                    feature=classify_feature(rel_path, config.features),
                )
            )
        return sources

    async def glob(self, config: DocsConfig, pattern: str) -> List[Path]:
        """Return sorted absolute paths under the repository root matching ``pattern``."""
        base = config.root / glob_base(pattern)
        if not await self._storage.is_dir(base):
            return []
        files = await self._storage.list_files(base)
        matching = [
            path for path in files if glob_matches(pattern, relative_path(path, config.root))
        ]
        return sorted(matching, key=lambda path: path.as_posix())


def glob_base(pattern: str) -> str:
    """Return the literal directory prefix of ``pattern`` (may be empty)."""
    literal: List[str] = []
    for segment in pattern.split("/")[:-1]:
        if any(char in segment for char in "*?"):
            break
        literal.append(segment)
    return "/".join(literal)


def glob_matches(pattern: str, rel_path: str) -> bool:
    """Return True when ``rel_path`` matches the repository-relative ``pattern``.

    ``**/`` spans zero or more directories, ``*`` and ``?`` stay within a
    single path segment. Wildcards never match a segment that starts with
    a dot; dot-files are selected only by spelling the dot out.
    """
    return _compile_glob(pattern).fullmatch(rel_path) is not None


_SEGMENT = r"(?!\.)[^/]*"


@lru_cache(maxsize=64)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    parts: List[str] = []
    index = 0
    while index < len(pattern):
        segment_start = index == 0 or pattern[index - 1] == "/"
        if pattern.startswith("**/", index):
            parts.append(f"(?:{_SEGMENT}/)*")
            index += 3
        elif pattern.startswith("**", index):
            head = _SEGMENT if segment_start else "[^/]*"
            parts.append(f"{head}(?:/{_SEGMENT})*")
            index += 2
        elif pattern[index] == "*":
            parts.append(_SEGMENT if segment_start else "[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/.]" if segment_start else "[^/]")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts))


__all__ = ["SourceCollector", "glob_base", "glob_matches", "relative_path"]
