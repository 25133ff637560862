"""Storage backends used by the build pipeline."""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path, PurePosixPath
from typing import Dict, List, Protocol


class Storage(Protocol):
    """File-system capability injected into the build pipeline."""

    async def exists(self, path: Path) -> bool: ...

    async def is_dir(self, path: Path) -> bool: ...

    async def list_files(self, root: Path) -> List[Path]: ...

    async def read_text(self, path: Path) -> str: ...

    async def write_text(self, path: Path, content: str) -> None: ...

    async def ensure_dir(self, path: Path) -> None: ...

    async def remove_tree(self, path: Path) -> None: ...


class LocalStorage:
    """Disk-backed storage; blocking calls run in a worker thread."""

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.exists)

    async def is_dir(self, path: Path) -> bool:
        return await asyncio.to_thread(path.is_dir)

    async def list_files(self, root: Path) -> List[Path]:
        return await asyncio.to_thread(self._walk, root)

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")

    async def write_text(self, path: Path, content: str) -> None:
        await asyncio.to_thread(self._write, path, content)

    async def ensure_dir(self, path: Path) -> None:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)

    async def remove_tree(self, path: Path) -> None:
        await asyncio.to_thread(self._remove, path)

    @staticmethod
    def _walk(root: Path) -> List[Path]:
        files: List[Path] = []
        for dirpath, _dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            files.extend(current / name for name in filenames)
        return files

    @staticmethod
    def _write(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    @staticmethod
    def _remove(path: Path) -> None:
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()


class MemoryStorage:
    """In-memory storage keyed by POSIX path, for tests and previews."""

    def __init__(self, files: Dict[str, str] | None = None) -> None:
        self.files: Dict[str, str] = {}
        self._dirs: set[str] = set()
        for path, content in (files or {}).items():
            self._put(PurePosixPath(path).as_posix(), content)

    async def exists(self, path: Path) -> bool:
        key = self._key(path)
        return key in self.files or key in self._dirs

    async def is_dir(self, path: Path) -> bool:
        return self._key(path) in self._dirs

    async def list_files(self, root: Path) -> List[Path]:
        prefix = self._key(root).rstrip("/") + "/"
        return [Path(key) for key in self.files if key.startswith(prefix)]

    async def read_text(self, path: Path) -> str:
        key = self._key(path)
        if key not in self.files:
            raise FileNotFoundError(f"No such file: {key}")
        return self.files[key]

    async def write_text(self, path: Path, content: str) -> None:
        self._put(self._key(path), content)

    async def ensure_dir(self, path: Path) -> None:
        self._add_dirs(self._key(path))

    async def remove_tree(self, path: Path) -> None:
        key = self._key(path)
        prefix = key.rstrip("/") + "/"
        self.files = {
            name: content
            for name, content in self.files.items()
            if name != key and not name.startswith(prefix)
        }
        self._dirs = {name for name in self._dirs if name != key and not name.startswith(prefix)}

    def _put(self, key: str, content: str) -> None:
        self.files[key] = content
        self._add_dirs(str(PurePosixPath(key).parent))

    def _add_dirs(self, key: str) -> None:
        current = PurePosixPath(key)
        while str(current) not in {"/", "."}:
            self._dirs.add(str(current))
            current = current.parent

    @staticmethod
    def _key(path: Path | str) -> str:
        return PurePosixPath(Path(path).as_posix()).as_posix()


__all__ = ["LocalStorage", "MemoryStorage", "Storage"]
