"""Detection and storage of try builds announced on pull requests."""

from __future__ import annotations

import json
import os
import re
import sqlite3
from dataclasses import dataclass
from typing import Protocol

from crater.github import Commit

_HOMU_COMMENT_RE = re.compile(r"<!-- homu: (\{.*\}) -->")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS try_builds (
    repo TEXT NOT NULL,
    pr INTEGER NOT NULL,
    base_sha TEXT NOT NULL,
    merge_sha TEXT NOT NULL,
    PRIMARY KEY (repo, pr)
);
"""


class _CommitsApi(Protocol):
    def get_commit(self, repo: str, sha: str) -> Commit: ...


@dataclass(frozen=True)
class TryBuild:
    base_sha: str
    merge_sha: str


def parse_homu_comment(comment: str) -> str | None:
    """Return the merge commit of a completed try build announced in ``comment``."""
    match = _HOMU_COMMENT_RE.search(comment)
    if match is None:
        return None
    try:
        payload = json.loads(match[1])
    except ValueError:
        return None
    if not isinstance(payload, dict) or payload.get("type") != "TryBuildCompleted":
        return None
    merge_sha = payload.get("merge_sha")
    return merge_sha if isinstance(merge_sha, str) else None


def base_commit(github: _CommitsApi, repo: str, merge_sha: str) -> str | None:
    """Return the first parent of a merge commit, or None if it is not a merge."""
    commit = github.get_commit(repo, merge_sha)
    if len(commit.parents) != 2:
        return None
    return commit.parents[0].sha


class TryBuildStore:
    """SQLite-backed record of the latest try build of each pull request."""

    def __init__(self, path: str | os.PathLike[str] = ":memory:") -> None:
        self._conn = sqlite3.connect(path)
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def detect(self, github: _CommitsApi, repo: str, pr: int, comment: str) -> None:
        """Record the try build announced in ``comment``, if there is one."""
        merge_sha = parse_homu_comment(comment)
        if merge_sha is None:
            return
        base_sha = base_commit(github, repo, merge_sha)
        if base_sha is None:
            return
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO try_builds (repo, pr, base_sha, merge_sha) "
                "VALUES (?, ?, ?, ?);",
                (repo, pr, base_sha, merge_sha),
            )

    def get_sha(self, repo: str, pr: int) -> TryBuild | None:
        row = self._conn.execute(
            "SELECT base_sha, merge_sha FROM try_builds WHERE repo = ? AND pr = ?;",
            (repo, pr),
        ).fetchone()
        return TryBuild(*row) if row else None

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> TryBuildStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()