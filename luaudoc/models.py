"""Core data models shared across luaudoc components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Layer(str, Enum):
    """Runtime layer inferred from the first segment under the source root."""

    CLIENT = "Client"
    SERVER = "Server"
    SHARED = "Shared"
    NETWORK = "Network"
    UNCLASSIFIED = "Unclassified"


KNOWN_LAYERS: tuple[Layer, ...] = (Layer.CLIENT, Layer.SERVER, Layer.SHARED, Layer.NETWORK)


@dataclass(frozen=True)
class SourceFile:
    """A collected source file with its derived classification."""

    path: str
    relative_path: str
    layer: Layer
    feature: str


@dataclass(frozen=True)
class FeatureRule:
    """Ordered path rule mapping files to a logical feature area."""

    key: str
    description: str
    pattern: str | None = None
    prefixes: tuple[str, ...] = ()

    def matches(self, relative_path: str) -> bool:
        if any(relative_path.startswith(prefix) for prefix in self.prefixes):
            return True
        if self.pattern and re.search(self.pattern, relative_path, re.IGNORECASE):
            return True
        return False


@dataclass(frozen=True)
class ApiScope:
    """Glob-defined subset of files that receives an API reference page."""

    key: str
    title: str
    glob: str


@dataclass
class ExportTypeDoc:
    name: str
    signature: str


@dataclass
class FunctionDoc:
    name: str
    signature: str
    docs: str = ""


@dataclass
class ModuleDoc:
    """Structural summary of one module inside an API scope."""

    module_name: str
    relative_path: str
    feature: str
    export_types: List[ExportTypeDoc] = field(default_factory=list)
    functions: List[FunctionDoc] = field(default_factory=list)
    has_parse_errors: bool = False

