"""Tests for the storage backends."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from luaudoc.storage import LocalStorage, MemoryStorage


def test_local_storage_round_trip(tmp_path: Path) -> None:
    storage = LocalStorage()
    target = tmp_path / "out" / "nested" / "page.md"

    async def scenario() -> list[Path]:
        await storage.write_text(target, "hello\n")
        assert await storage.read_text(target) == "hello\n"
        assert await storage.is_dir(tmp_path / "out")
        listed = await storage.list_files(tmp_path / "out")
        await storage.remove_tree(tmp_path / "out")
        assert not await storage.exists(tmp_path / "out")
        await storage.remove_tree(tmp_path / "out")
        return listed

    assert asyncio.run(scenario()) == [target]


def test_memory_storage_tracks_directories() -> None:
    storage = MemoryStorage({"/repo/src/Server/A.luau": "return {}"})

    async def scenario() -> None:
        assert await storage.is_dir(Path("/repo/src"))
        assert await storage.exists(Path("/repo/src/Server/A.luau"))
        assert not await storage.is_dir(Path("/repo/src/Server/A.luau"))
        await storage.ensure_dir(Path("/repo/docs"))
        assert await storage.is_dir(Path("/repo/docs"))
        await storage.write_text(Path("/repo/docs/a/b.md"), "page")
        assert await storage.list_files(Path("/repo/docs")) == [Path("/repo/docs/a/b.md")]
        await storage.remove_tree(Path("/repo/docs"))
        assert not await storage.exists(Path("/repo/docs"))
        assert await storage.list_files(Path("/repo/docs")) == []
        assert await storage.read_text(Path("/repo/src/Server/A.luau")) == "return {}"

    asyncio.run(scenario())


def test_memory_storage_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        asyncio.run(MemoryStorage().read_text(Path("/nope.luau")))


def test_local_storage_replaces_undecodable_bytes(tmp_path: Path) -> None:
    target = tmp_path / "Bad.luau"
    target.write_bytes(b"-- caf\xe9\nreturn {}\n")

    text = asyncio.run(LocalStorage().read_text(target))

    assert text == "-- caf�\nreturn {}\n"
