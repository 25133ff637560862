"""Configuration loading for luaudoc (.luaudoc.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml

from .models import ApiScope, FeatureRule

CONFIG_FILENAME = ".luaudoc.yml"
DEFAULT_FEATURE = "Utilities"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


DEFAULT_FEATURES: tuple[FeatureRule, ...] = (
    FeatureRule(
        key="TenantSystem",
        description="Tenant lifecycle, offers, leases, rent, and resident interactions.",
        pattern=r"(Tenant|Resident|Lease|Mailbox|Review|Tips|TenantHelp)",
    ),
    FeatureRule(
        key="PlotSystem",
        description="Plot ownership, build/placement, room state, and world placement.",
        pattern=r"(Plot|Build|Placement|Room|Grid|Floor|Wall|Roof)",
    ),
    FeatureRule(
        key="Network",
        description="Replication packets and client/server transport contracts.",
        pattern=r"Packets",
        prefixes=("src/Network/",),
    ),
    FeatureRule(
        key="Utilities",
        description="Cross-cutting helpers used by multiple systems.",
        pattern=r"(Utilities|Helpers|Formatter|Timer|RateLimiter|Debounce)",
    ),
)

DEFAULT_SCOPES: tuple[ApiScope, ...] = (
    ApiScope(key="server-services", title="Server Services", glob="src/Server/Services/**/*.luau"),
    ApiScope(key="shared-utilities", title="Shared Utilities", glob="src/Shared/Utilities/**/*.luau"),
    ApiScope(key="client-modules", title="Client Modules", glob="src/Client/Modules/**/*.luau"),
)


@dataclass
class DocsConfig:
    """Represents the settings defined in .luaudoc.yml."""

    root: Path
    source_dir: str = "src"
    output_dir: str = "docs/content/generated"
    extension: str = ".luau"
    features: List[FeatureRule] = field(default_factory=lambda: list(DEFAULT_FEATURES))
    scopes: List[ApiScope] = field(default_factory=lambda: list(DEFAULT_SCOPES))

    @property
    def source_root(self) -> Path:
        return self.root / self.source_dir

    @property
    def output_root(self) -> Path:
        return self.root / self.output_dir


def load_config(config_path: Path) -> DocsConfig:
    """Load configuration from disk, falling back to built-in defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DocsConfig(root=root)
    source_dir = _as_str(data.get("source_dir"))
    if source_dir:
        config.source_dir = source_dir.strip("/")
    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = output_dir.rstrip("/")
    extension = _as_str(data.get("extension"))
    if extension:
        config.extension = extension if extension.startswith(".") else f".{extension}"

    if "features" in data:
        config.features = _parse_features(data.get("features"))
    if "scopes" in data:
        config.scopes = _parse_scopes(data.get("scopes"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_features(value: Any) -> List[FeatureRule]:
    if not isinstance(value, list):
        raise ConfigError("'features' must be a list of feature rules")
    rules: List[FeatureRule] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"features[{index}] must be a mapping")
        key = _as_str(entry.get("key"))
        if not key:
            raise ConfigError(f"features[{index}] is missing 'key'")
        pattern = _as_str(entry.get("pattern"))
        prefixes = tuple(_as_str_list(entry.get("prefixes")))
        if not pattern and not prefixes:
            raise ConfigError(f"feature '{key}' needs a 'pattern' or 'prefixes'")
        if pattern:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"feature '{key}' has an invalid pattern: {exc}") from exc
        rules.append(
            FeatureRule(
                key=key,
                description=_as_str(entry.get("description")) or "",
                pattern=pattern,
                prefixes=prefixes,
            )
        )
    return rules


def _parse_scopes(value: Any) -> List[ApiScope]:
    if not isinstance(value, list):
        raise ConfigError("'scopes' must be a list of scope rules")
    scopes: List[ApiScope] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"scopes[{index}] must be a mapping")
        key = _as_str(entry.get("key"))
        glob = _as_str(entry.get("glob"))
        if not key or not glob:
            raise ConfigError(f"scopes[{index}] requires 'key' and 'glob'")
        scopes.append(ApiScope(key=key, title=_as_str(entry.get("title")) or key, glob=glob))
    return scopes


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "ConfigError",
    "DEFAULT_FEATURE",
    "DEFAULT_FEATURES",
    "DEFAULT_SCOPES",
    "DocsConfig",
    "load_config",
]
