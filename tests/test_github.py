import json

import pytest
import requests
import responses

from crater.github import (
    Commit,
    CommitParent,
    EventIssueComment,
    GitHubApi,
    GitHubError,
    Issue,
    Label,
    PullRequest,
)

ISSUE_URL = "https://api.github.com/repos/rust-lang/rust/issues/1"


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def api():
    return GitHubApi("token")


def test_username_uses_relative_url_and_token(mock, api):
    mock.add(responses.GET, "https://api.github.com/user", json={"id": 1, "login": "bot"})
    assert api.username() == "bot"
    assert mock.calls[0].request.headers["Authorization"] == "token token"


def test_post_comment_sends_body(mock, api):
    mock.add(responses.POST, f"{ISSUE_URL}/comments", status=201, json={})
    api.post_comment(ISSUE_URL, "hello")
    assert json.loads(mock.calls[0].request.body) == {"body": "hello"}


def test_post_comment_failure(mock, api):
    mock.add(responses.POST, f"{ISSUE_URL}/comments", status=403, json={"message": "nope"})
    with pytest.raises(GitHubError) as info:
        api.post_comment(ISSUE_URL, "hello")
    assert info.value.status == 403
    assert info.value.message == "nope"
    assert "request to GitHub API failed with status" in str(info.value)


def test_list_labels(mock, api):
    mock.add(responses.GET, f"{ISSUE_URL}/labels", json=[{"name": "a"}, {"name": "b"}])
    assert api.list_labels(ISSUE_URL) == [Label("a"), Label("b")]


def test_list_labels_failure(mock, api):
    mock.add(responses.GET, f"{ISSUE_URL}/labels", status=404, json={"message": "missing"})
    with pytest.raises(GitHubError):
        api.list_labels(ISSUE_URL)


def test_add_label_sends_list(mock, api):
    mock.add(responses.POST, f"{ISSUE_URL}/labels", json=[])
    api.add_label(ISSUE_URL, "bug")
    assert json.loads(mock.calls[0].request.body) == ["bug"]


def test_remove_label(mock, api):
    mock.add(responses.DELETE, f"{ISSUE_URL}/labels/bug", json=[])
    api.remove_label(ISSUE_URL, "bug")
    assert mock.calls[0].request.method == "DELETE"


def test_list_teams(mock, api):
    mock.add(
        responses.GET,
        "https://api.github.com/orgs/rust-lang/teams",
        json=[{"id": 1, "slug": "infra"}, {"id": 2, "slug": "compiler"}],
    )
    assert api.list_teams("rust-lang") == {"infra": 1, "compiler": 2}


def test_team_members(mock, api):
    mock.add(
        responses.GET,
        "https://api.github.com/teams/7/members",
        json=[{"id": 1, "login": "alice"}, {"id": 2, "login": "bob"}],
    )
    assert api.team_members(7) == ["alice", "bob"]


def test_get_commit(mock, api):
    mock.add(
        responses.GET,
        "https://api.github.com/repos/rust-lang/rust/commits/abc",
        json={"sha": "abc", "parents": [{"sha": "p1"}, {"sha": "p2"}]},
    )
    commit = api.get_commit("rust-lang/rust", "abc")
    assert commit == Commit("abc", (CommitParent("p1"), CommitParent("p2")))


def test_get_commit_error_status(mock, api):
    mock.add(
        responses.GET,
        "https://api.github.com/repos/rust-lang/rust/commits/abc",
        status=404,
        json={"message": "missing"},
    )
    with pytest.raises(requests.HTTPError):
        api.get_commit("rust-lang/rust", "abc")


def test_get_pr_head_sha(mock, api):
    mock.add(
        responses.GET,
        "https://api.github.com/repos/rust-lang/rust/pulls/12",
        json={"head": {"sha": "deadbeef"}},
    )
    assert api.get_pr_head_sha("rust-lang/rust", 12) == "deadbeef"


def test_issue_from_dict():
    issue = Issue.from_dict(
        {"number": 3, "url": "u", "html_url": "h", "labels": [{"name": "x"}]}
    )
    assert issue == Issue(3, "u", "h", (Label("x"),), None)
    pr = Issue.from_dict(
        {"number": 3, "url": "u", "html_url": "h", "labels": [], "pull_request": {"html_url": "p"}}
    )
    assert pr.pull_request == PullRequest("p")


def test_issue_from_dict_missing_field():
    with pytest.raises(ValueError):
        Issue.from_dict({"number": 3})


def test_event_from_dict():
    event = EventIssueComment.from_dict(
        {
            "action": "created",
            "issue": {"number": 1, "url": "u", "html_url": "h", "labels": []},
            "comment": {"body": "@bot ping"},
            "sender": {"id": 5, "login": "alice"},
            "repository": {"full_name": "rust-lang/rust"},
        }
    )
    assert event.action == "created"
    assert event.comment.body == "@bot ping"
    assert (event.sender.id, event.sender.login) == (5, "alice")
    assert event.repository.full_name == "rust-lang/rust"
    assert event.issue.number == 1