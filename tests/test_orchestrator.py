"""Tests for luaudoc.orchestrator."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from luaudoc.config import DocsConfig
from luaudoc.extractors import ModuleAnalyzer
from luaudoc.orchestrator import BuildContext, Orchestrator
from luaudoc.storage import MemoryStorage
from tests._fixtures.repo_builder import RepoBuilder

GENERATED = "docs/content/generated"


class StubValidator:
    def has_errors(self, source: str) -> bool:
        return "BROKEN" in source


def _orchestrator() -> Orchestrator:
    return Orchestrator(analyzer=ModuleAnalyzer(validator=StubValidator()))


def test_end_to_end_single_server_service(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/Server/Services/LeaseService.luau": """
                local LeaseService = {}

                -- Opens a lease for the tenant.
                function LeaseService.Open(tenantId: number): boolean
                    return true
                end

                return LeaseService
            """,
        }
    )

    outcome = Orchestrator().run_build(str(repo_builder.path()))

    root = repo_builder.path()
    assert outcome.output_root == root / GENERATED
    overview = repo_builder.read(f"{GENERATED}/architecture/overview.md")
    assert "- **Server**: 1 Luau files" in overview
    assert "- **Client**: 0 Luau files" in overview

    feature = repo_builder.read(f"{GENERATED}/features/tenantsystem.md")
    server_section = feature[feature.index("## Server") : feature.index("## Client")]
    assert "- `src/Server/Services/LeaseService.luau`" in server_section

    scope = repo_builder.read(f"{GENERATED}/api/server-services.md")
    assert "Generated modules: **1**" in scope
    assert scope.count("\n## ") == 1
    assert "## LeaseService" in scope
    assert "- Parse status: `ok`" in scope
    assert scope.count("#### ") == 1
    assert "#### Open" in scope
    assert "function LeaseService.Open(tenantId: number): boolean" in scope
    assert "```text\nOpens a lease for the tenant.\n```" in scope

    index = repo_builder.read(f"{GENERATED}/api/index.md")
    assert "- [Server Services](./server-services)" in index


def test_pages_are_emitted_in_fixed_order(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/Shared/Utilities/Timer.luau": "return {}\n"})

    outcome = _orchestrator().run_build(str(repo_builder.path()))

    relative = [page.relative_to(outcome.output_root).as_posix() for page in outcome.pages]
    assert relative == [
        "architecture/overview.md",
        "features/tenantsystem.md",
        "features/plotsystem.md",
        "features/network.md",
        "features/utilities.md",
        "api/server-services.md",
        "api/shared-utilities.md",
        "api/client-modules.md",
        "api/index.md",
    ]


def test_rebuild_drops_removed_files_and_stale_pages(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/Server/Services/PlotService.luau": "local PlotService = {}\nreturn PlotService\n",
            "src/Server/Services/TenantService.luau": "local TenantService = {}\nreturn TenantService\n",
        }
    )
    root = repo_builder.path()
    stale = root / GENERATED / "legacy" / "old.md"
    stale.parent.mkdir(parents=True)
    stale.write_text("PlotService.luau", encoding="utf-8")

    _orchestrator().run_build(str(root))
    assert "PlotService" in repo_builder.read(f"{GENERATED}/api/server-services.md")
    assert not stale.exists()

    repo_builder.remove("src/Server/Services/PlotService.luau")
    _orchestrator().run_build(str(root))

    for page in (root / GENERATED).rglob("*.md"):
        assert "PlotService" not in page.read_text(encoding="utf-8"), page


def test_build_with_memory_storage() -> None:
    root = Path("/repo")
    storage = MemoryStorage(
        {
            "/repo/src/Client/Modules/Hud.luau": (
                "local Hud = {}\n"
                "export type HudState = { visible: boolean }\n"
                "--[[\n  Shows the HUD.\n]]\n"
                "function Hud:Show()\nend\n"
                "return Hud\n"
            ),
            "/repo/src/Client/Modules/Broken.luau": "-- BROKEN\nlocal x = \n",
            "/repo/src/Network/Packets.luau": "return {}\n",
            "/repo/src/Tools/Thing.luau": "return {}\n",
        }
    )
    context = BuildContext(config=DocsConfig(root=root), storage=storage)

    asyncio.run(_orchestrator().build(context))

    generated = "/repo/docs/content/generated"
    client = storage.files[f"{generated}/api/client-modules.md"]
    assert "Generated modules: **2**" in client
    assert client.index("## Broken") < client.index("## Hud")
    assert "- Parse status: `tree-sitter parse has recoverable errors`" in client
    assert "#### HudState" in client
    assert "function Hud:Show()" in client
    assert "```text\nShows the HUD.\n```" in client

    overview = storage.files[f"{generated}/architecture/overview.md"]
    assert "- **Client**: 2 Luau files" in overview
    assert "- **Network**: 1 Luau files" in overview
    assert "- **Unclassified**: 1 Luau files" in overview

    network = storage.files[f"{generated}/features/network.md"]
    assert "- `src/Network/Packets.luau`" in network

    server = storage.files[f"{generated}/api/server-services.md"]
    assert "Generated modules: **0**" in server


def test_missing_repository_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run_build(str(tmp_path / "missing"))


def test_missing_source_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Source root not found"):
        _orchestrator().run_build(str(tmp_path))


def test_undecodable_scoped_file_does_not_halt_build(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/Server/Services/Good.luau": "local Good = {}\nreturn Good\n"})
    bad = repo_builder.path() / "src/Server/Services/Bad.luau"
    bad.write_bytes(b"local Bad = {}\n-- caf\xe9\nfunction Bad.Run()\nend\nreturn Bad\n")

    _orchestrator().run_build(str(repo_builder.path()))

    scope = repo_builder.read(f"{GENERATED}/api/server-services.md")
    assert "Generated modules: **2**" in scope
    assert "#### Run" in scope
    assert "caf\N{REPLACEMENT CHARACTER}" in scope


def test_default_feature_page_written_when_no_rule_claims_it(
    repo_builder: RepoBuilder,
) -> None:
    repo_builder.write(
        {
            ".luaudoc.yml": """
                features:
                  - key: Combat
                    description: Weapons and damage.
                    pattern: Weapon
            """,
            "src/Server/WeaponService.luau": "return {}\n",
            "src/Shared/Constants.luau": "return {}\n",
        }
    )

    outcome = _orchestrator().run_build(str(repo_builder.path()))

    relative = [page.relative_to(outcome.output_root).as_posix() for page in outcome.pages]
    assert relative[:3] == [
        "architecture/overview.md",
        "features/combat.md",
        "features/utilities.md",
    ]
    utilities = repo_builder.read(f"{GENERATED}/features/utilities.md")
    assert "- `src/Shared/Constants.luau`" in utilities
    assert "WeaponService" not in utilities


def test_default_feature_page_skipped_when_bucket_empty(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".luaudoc.yml": """
                features:
                  - key: Combat
                    pattern: Weapon
            """,
            "src/Server/WeaponService.luau": "return {}\n",
        }
    )

    outcome = _orchestrator().run_build(str(repo_builder.path()))

    features = [page.name for page in outcome.pages if page.parent.name == "features"]
    assert features == ["combat.md"]
