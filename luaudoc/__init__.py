"""Static documentation generator for Luau codebases."""

from .orchestrator import BuildContext, BuildOutcome, Orchestrator

__version__ = "0.1.0"

__all__ = ["BuildContext", "BuildOutcome", "Orchestrator", "__version__"]
