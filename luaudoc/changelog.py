"""Changelog maintenance for merged pull requests."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .logging import get_logger

EVENT_PATH_ENV = "GITHUB_EVENT_PATH"
UNRELEASED_HEADING = "## [Unreleased]"
MERGED_HEADING = "### Merged PRs"

_UNRELEASED_BLOCK = re.compile(r"^## \[Unreleased\].*?(?=^## \[|\Z)", re.MULTILINE | re.DOTALL)
_MERGED_HEADING_LINE = re.compile(r"^### Merged PRs[ \t]*(?:\n|\Z)\n*", re.MULTILINE)

logger = get_logger("changelog")


class ChangelogError(RuntimeError):
    """Raised when the event or changelog cannot be processed."""


@dataclass
class MergedPullRequest:
    """The fields of a merged pull request that end up in the changelog."""

    number: int
    title: str
    author: str
    author_url: str
    url: str
    merged_date: str
    labels: List[str]

    @property
    def marker(self) -> str:
        return f"PR #{self.number}:"

    def entry(self) -> str:
        labels = f", labels: {', '.join(self.labels)}" if self.labels else ""
        return (
            f"- PR #{self.number}: {self.title} "
            f"([@{self.author}]({self.author_url}), {self.merged_date}{labels}) "
            f"([link]({self.url}))"
        )


def parse_event(event: Mapping[str, Any], *, now: datetime | None = None) -> Optional[MergedPullRequest]:
    """Return the merged pull request described by ``event``, if any."""
    pr = event.get("pull_request")
    if not isinstance(pr, dict) or not pr.get("merged"):
        return None

    user = pr.get("user") if isinstance(pr.get("user"), dict) else {}
    author = user.get("login") or "unknown"
    merged_at = pr.get("merged_at") or (now or datetime.now(UTC)).isoformat()
    labels = [
        str(label["name"])
        for label in pr.get("labels") or []
        if isinstance(label, dict) and label.get("name")
    ]
    return MergedPullRequest(
        number=pr.get("number"),
        title=str(pr.get("title") or "Untitled PR").strip(),
        author=author,
        author_url=user.get("html_url") or f"https://github.com/{author}",
        url=pr.get("html_url") or "",
        merged_date=str(merged_at)[:10],
        labels=sorted(labels, key=str.casefold),
    )


def insert_entry(changelog: str, pr: MergedPullRequest) -> Optional[str]:
    """Return ``changelog`` with the entry for ``pr`` added, or None if present."""
    if pr.marker in changelog:
        return None

    if UNRELEASED_HEADING not in changelog:
        changelog = f"{UNRELEASED_HEADING}\n\n{changelog}"

    match = _UNRELEASED_BLOCK.search(changelog)
    if match is None:
        raise ChangelogError("Could not locate the [Unreleased] section in the changelog.")

    block = match.group(0)
    entry = pr.entry()
    heading = _MERGED_HEADING_LINE.search(block)
    if heading is not None:
        updated = f"{block[: heading.start()]}{MERGED_HEADING}\n\n{entry}\n{block[heading.end() :]}"
    else:
        updated = f"{block}\n{MERGED_HEADING}\n\n{entry}\n"
    return f"{changelog[: match.start()]}{updated}{changelog[match.end() :]}"


def update_changelog(event: Mapping[str, Any], changelog: str) -> Optional[str]:
    """Return updated changelog text, or None when nothing needs to change."""
    pr = parse_event(event)
    if pr is None:
        return None
    return insert_entry(changelog, pr)


def run_changelog_update(
    changelog_path: Path,
    *,
    event_path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Apply the current pull-request event to ``changelog_path`` and describe the result."""
    env = os.environ if environ is None else environ
    event_path = event_path or env.get(EVENT_PATH_ENV)
    if not event_path:
        raise ChangelogError(f"{EVENT_PATH_ENV} is not set.")

    try:
        event: Dict[str, Any] = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChangelogError(f"Event payload at {event_path} is not valid JSON: {exc}") from exc

    pr = parse_event(event)
    if pr is None:
        return "No merged pull request in this event. Nothing to update."

    changelog = changelog_path.read_text(encoding="utf-8") if changelog_path.exists() else ""
    updated = insert_entry(changelog, pr)
    if updated is None:
        return f"{changelog_path.name} already contains PR #{pr.number}."

    changelog_path.write_text(updated, encoding="utf-8")
    logger.debug("Inserted entry for PR #%s into %s", pr.number, changelog_path)
    return f"Added changelog entry for PR #{pr.number}."


__all__ = [
    "ChangelogError",
    "MergedPullRequest",
    "insert_entry",
    "parse_event",
    "run_changelog_update",
    "update_changelog",
]
