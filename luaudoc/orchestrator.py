"""Pipeline orchestration for full documentation rebuilds."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .classify import classify_feature
from .config import DEFAULT_FEATURE, DocsConfig, load_config
from .extractors import ModuleAnalyzer
from .logging import get_logger
from .models import FeatureRule, Layer, ModuleDoc, SourceFile
from .render import render_api_index, render_architecture, render_feature, render_scope
from .scanner import SourceCollector, relative_path
from .storage import LocalStorage, Storage


@dataclass
class BuildContext:
    """Everything a build run needs, passed explicitly."""

    config: DocsConfig
    storage: Storage

    @property
    def output_root(self) -> Path:
        return self.config.output_root


@dataclass
class BuildOutcome:
    """Pages written by a build, in emission order."""

    output_root: Path
    pages: List[Path] = field(default_factory=list)


class Orchestrator:
    """Coordinates collection, extraction, and page emission."""

    def __init__(self, analyzer: ModuleAnalyzer | None = None) -> None:
        self.analyzer = analyzer or ModuleAnalyzer()
        self.logger = get_logger("orchestrator")

    def run_build(self, path: str, *, storage: Storage | None = None) -> BuildOutcome:
        """Rebuild the generated docs for the repository at ``path``."""
        repo_path = Path(path).expanduser().resolve()
        if not repo_path.exists():
            raise FileNotFoundError(f"Repository path not found: {path}")
        if not repo_path.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {path}")
        config = load_config(repo_path)
        context = BuildContext(config=config, storage=storage or LocalStorage())
        return asyncio.run(self.build(context))

    async def build(self, context: BuildContext) -> BuildOutcome:
        config = context.config
        storage = context.storage
        collector = SourceCollector(storage)
        self.logger.info("Starting build for %s", config.root)

        await storage.remove_tree(context.output_root)
        await storage.ensure_dir(context.output_root)
        outcome = BuildOutcome(output_root=context.output_root)

        sources = await collector.scan(config)
        self.logger.debug("Collected %d source files", len(sources))

        by_layer = self._bucket_by_layer(sources)
        await self._write(
            context,
            outcome,
            Path("architecture") / "overview.md",
            render_architecture(by_layer, source_dir=config.source_dir),
        )

        by_feature = self._bucket_by_feature(sources, context)
        for feature in self._feature_pages(config, by_feature):
            await self._write(
                context,
                outcome,
                Path("features") / f"{feature.key.lower()}.md",
                render_feature(feature, by_feature.get(feature.key, [])),
            )

        for scope in config.scopes:
            modules = await self._collect_modules(context, collector, scope.glob)
            self.logger.debug("Scope %s: %d modules", scope.key, len(modules))
            await self._write(
                context,
                outcome,
                Path("api") / f"{scope.key}.md",
                render_scope(scope, modules),
            )

        await self._write(
            context,
            outcome,
            Path("api") / "index.md",
            render_api_index(config.scopes),
        )

        self.logger.info(
            "Generated %d pages in %s", len(outcome.pages), self._display(context.output_root, config)
        )
        return outcome

    async def _collect_modules(
        self, context: BuildContext, collector: SourceCollector, pattern: str
    ) -> List[ModuleDoc]:
        config = context.config
        modules: List[ModuleDoc] = []
        for path in await collector.glob(config, pattern):
            source = await context.storage.read_text(path)
            rel_path = relative_path(path, config.root)
            modules.append(
                self.analyzer.analyze(
                    source,
                    rel_path,
                    classify_feature(rel_path, config.features),
                )
            )
        return modules

    @staticmethod
    def _bucket_by_layer(sources: List[SourceFile]) -> Dict[Layer, List[SourceFile]]:
        buckets: Dict[Layer, List[SourceFile]] = {layer: [] for layer in Layer}
        for source in sources:
            buckets[source.layer].append(source)
        return buckets

    @staticmethod
    def _feature_pages(
        config: DocsConfig, by_feature: Dict[str, List[SourceFile]]
    ) -> List[FeatureRule]:
        """Declared features, plus the default arm when only it holds files."""
        features = list(config.features)
        declared = {feature.key for feature in features}
        if DEFAULT_FEATURE not in declared and by_feature.get(DEFAULT_FEATURE):
            features.append(
                FeatureRule(
                    key=DEFAULT_FEATURE,
                    description="Files not matched by any configured feature rule.",
                )
            )
        return features

    @staticmethod
    def _bucket_by_feature(
        sources: List[SourceFile], context: BuildContext
    ) -> Dict[str, List[SourceFile]]:
        buckets: Dict[str, List[SourceFile]] = {
            feature.key: [] for feature in context.config.features
        }
        for source in sources:
            buckets.setdefault(source.feature, []).append(source)
        return buckets

    async def _write(
        self, context: BuildContext, outcome: BuildOutcome, relative: Path, content: str
    ) -> None:
        target = context.output_root / relative
        await context.storage.write_text(target, content)
        outcome.pages.append(target)
        self.logger.debug("Wrote %s", target)

    @staticmethod
    def _display(path: Path, config: DocsConfig) -> str:
        try:
            return path.relative_to(config.root).as_posix()
        except ValueError:
            return str(path)


__all__ = ["BuildContext", "BuildOutcome", "Orchestrator"]
