"""Client for the parts of the GitHub API the bot uses, and its payloads."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, TypeVar

import requests

from crater import http

API_BASE = "https://api.github.com/"

_T = TypeVar("_T")


def _status_text(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


class GitHubError(Exception):
    """A GitHub API request answered with an unexpected status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(
            f"request to GitHub API failed with status {_status_text(status)}: {message}"
        )
        self.status = status
        self.message = message


def _decode(kind: str, build: Callable[[], _T]) -> _T:
    try:
        return build()
    except (KeyError, TypeError) as err:
        raise ValueError(f"invalid GitHub {kind} payload: {err}") from err


@dataclass(frozen=True)
class User:
    id: int
    login: str


@dataclass(frozen=True)
class Label:
    name: str


@dataclass(frozen=True)
class PullRequest:
    html_url: str


@dataclass(frozen=True)
class Issue:
    number: int
    url: str
    html_url: str
    labels: tuple[Label, ...] = ()
    pull_request: PullRequest | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Issue:
        """Build an issue from its API representation."""

        def build() -> Issue:
            pull_request = data.get("pull_request")
            return cls(
                number=data["number"],
                url=data["url"],
                html_url=data["html_url"],
                labels=tuple(Label(label["name"]) for label in data["labels"]),
                pull_request=(
                    PullRequest(pull_request["html_url"]) if pull_request is not None else None
                ),
            )

        return _decode("issue", build)


@dataclass(frozen=True)
class Repository:
    full_name: str


@dataclass(frozen=True)
class Comment:
    body: str


@dataclass(frozen=True)
class Team:
    id: int
    slug: str


@dataclass(frozen=True)
class CommitParent:
    sha: str


@dataclass(frozen=True)
class Commit:
    sha: str
    parents: tuple[CommitParent, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Commit:
        """Build a commit from its API representation."""
        return _decode(
            "commit",
            lambda: cls(
                sha=data["sha"],
                parents=tuple(CommitParent(parent["sha"]) for parent in data["parents"]),
            ),
        )


@dataclass(frozen=True)
class EventIssueComment:
    action: str
    issue: Issue
    comment: Comment
    sender: User
    repository: Repository

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EventIssueComment:
        """Build an ``issue_comment`` webhook event from its payload."""
        return _decode(
            "event",
            lambda: cls(
                action=data["action"],
                issue=Issue.from_dict(data["issue"]),
                comment=Comment(data["comment"]["body"]),
                sender=User(data["sender"]["id"], data["sender"]["login"]),
                repository=Repository(data["repository"]["full_name"]),
            ),
        )


class GitHubApi:
    """Authenticated, blocking GitHub API client."""

    def __init__(self, token: str, user_agent: str = http.DEFAULT_USER_AGENT) -> None:
        self._token = token
        self._session = requests.Session()
        self._session.max_redirects = http.MAX_REDIRECTS
        self._session.headers["User-Agent"] = user_agent

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        if not url.startswith("https://"):
            url = API_BASE + url
        headers = {"Authorization": f"token {self._token}"}
        return self._session.request(method, url, headers=headers, **kwargs)

    @staticmethod
    def _expect(response: requests.Response, status: int) -> requests.Response:
        if response.status_code != status:
            raise GitHubError(response.status_code, response.json()["message"])
        return response

    def username(self) -> str:
        """Return the login of the authenticated user."""
        return self._request("GET", "user").json()["login"]

    def post_comment(self, issue_url: str, body: str) -> None:
        response = self._request("POST", f"{issue_url}/comments", json={"body": body})
        self._expect(response, HTTPStatus.CREATED)

    def list_labels(self, issue_url: str) -> list[Label]:
        response = self._expect(self._request("GET", f"{issue_url}/labels"), HTTPStatus.OK)
        return [Label(item["name"]) for item in response.json()]

    def add_label(self, issue_url: str, label: str) -> None:
        response = self._request("POST", f"{issue_url}/labels", json=[label])
        self._expect(response, HTTPStatus.OK)

    def remove_label(self, issue_url: str, label: str) -> None:
        response = self._request("DELETE", f"{issue_url}/labels/{label}")
        self._expect(response, HTTPStatus.OK)

    def list_teams(self, org: str) -> dict[str, int]:
        """Return the teams of an organisation, by slug."""
        response = self._expect(self._request("GET", f"orgs/{org}/teams"), HTTPStatus.OK)
        teams = [Team(item["id"], item["slug"]) for item in response.json()]
        return {team.slug: team.id for team in teams}

    def team_members(self, team: int) -> list[str]:
        """Return the logins of a team's members."""
        response = self._expect(self._request("GET", f"teams/{team}/members"), HTTPStatus.OK)
        return [item["login"] for item in response.json()]

    def get_commit(self, repo: str, sha: str) -> Commit:
        response = self._request("GET", f"repos/{repo}/commits/{sha}")
        response.raise_for_status()
        return Commit.from_dict(response.json())

    def get_pr_head_sha(self, repo: str, pr: int) -> str:
        response = self._request("GET", f"repos/{repo}/pulls/{pr}")
        response.raise_for_status()
        return response.json()["head"]["sha"]