"""Comments posted by the bot on GitHub issues."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from crater.github import Label as GitHubLabel


class Label(Enum):
    """Label the bot puts on an issue after posting a message."""

    EXPERIMENT_QUEUED = "experiment-queued"
    EXPERIMENT_COMPLETED = "experiment-completed"


@dataclass(frozen=True)
class LabelsConfig:
    """Names of the bot's labels and the pattern of labels to remove."""

    experiment_queued: str
    experiment_completed: str
    remove: re.Pattern[str]

    def __post_init__(self) -> None:
        if isinstance(self.remove, str):
            object.__setattr__(self, "remove", re.compile(self.remove))

    def _name(self, label: Label) -> str:
        if label is Label.EXPERIMENT_QUEUED:
            return self.experiment_queued
        return self.experiment_completed


class _IssuesApi(Protocol):
    def post_comment(self, issue_url: str, body: str) -> None: ...

    def list_labels(self, issue_url: str) -> list[GitHubLabel]: ...

    def add_label(self, issue_url: str, label: str) -> None: ...

    def remove_label(self, issue_url: str, label: str) -> None: ...


@dataclass
class Message:
    """A comment made of emoji-prefixed lines and notes."""

    lines: list[tuple[str, str]] = field(default_factory=list)
    notes: list[tuple[str, str]] = field(default_factory=list)
    new_label: Label | None = None

    def line(self, emoji: str, content: str) -> Message:
        self.lines.append((emoji, content))
        return self

    def note(self, emoji: str, content: str) -> Message:
        self.notes.append((emoji, content))
        return self

    def set_label(self, label: Label) -> Message:
        self.new_label = label
        return self

    def render(self) -> str:
        """Return the comment text in GitHub markdown."""
        body = "".join(f":{emoji}: {content}\n" for emoji, content in self.lines)
        return body + "".join(f"\n:{emoji}: {content}" for emoji, content in self.notes)

    def send(
        self, github: _IssuesApi, issue_url: str, labels: LabelsConfig, about_url: str
    ) -> None:
        """Post the message, with an explanatory note, and update the issue's labels."""
        about = (
            "**Crater** is a tool to run experiments across parts of the Rust ecosystem. "
            f"[Learn more]({about_url})"
        )
        full = Message(
            list(self.lines), [*self.notes, ("information_source", about)], self.new_label
        )
        github.post_comment(issue_url, full.render())

        if self.new_label is None:
            return
        label = labels._name(self.new_label)

        already_present = False
        for current in github.list_labels(issue_url):
            if current.name == label:
                already_present = True
            elif labels.remove.search(current.name):
                github.remove_label(issue_url, current.name)

        if not already_present:
            github.add_label(issue_url, label)