# crater

Building blocks for a service that compares two compiler toolchains across a
whole package ecosystem and is driven by a GitHub bot. The package provides:

- **Toolchain specs** (`crater.toolchain`): `Toolchain.parse` reads strings
  such as `stable`, `nightly-1970-01-01`, `master#<sha>`, `try#<sha>` or
  `stable+rustflags=-Dwarnings+cargoflags=...+patch=name=repo=branch`, and
  `str()` writes them back. `to_path_component()` percent-encodes the string so
  it can be used as a file name. Errors raise `ToolchainParseError`.
- **Bot commands** (`crater.commands`): `parse_command` reads commands such as
  `run name=pr-1 start=stable end=beta p=2` into a `ParsedCommand`. The words
  `run`, `check`, `abort`, `ping`, `retry-report`, `retry` and `reload-acl`
  select a command; anything else is read as `edit`. `start` and `end` become
  `Toolchain` values, `p` an integer, `ignore-blacklist` a boolean, and the
  other options (`name`, `mode`, `crates`, `cap-lints`, `assign`,
  `requirement`) stay strings. `CommandParser` and `CommandSpec` build parsers
  for other command sets.
- **Webhooks** (`crater.webhooks`): `verify_signature` checks `sha1=<hex>`
  HMAC signatures, `check_webhook` verifies a delivery and returns the newly
  created issue comment it carries (or `None`), and `extract_commands` yields
  the lines of a comment addressed to the bot.
- **GitHub access** (`crater.github`): `GitHubApi` posts comments, lists, adds
  and removes labels, lists teams and their members, and fetches commits and
  pull request heads. Payload classes such as `Issue`, `Commit` and
  `EventIssueComment` are built with `from_dict`.
- **Bot messages** (`crater.messages`): `Message` assembles emoji-prefixed
  lines and notes, renders them as markdown, posts them, and swaps labels on the
  issue according to a `LabelsConfig`.
- **Try builds** (`crater.try_builds`): `parse_homu_comment` spots "try build
  completed" markers in comments, and `TryBuildStore` records the base and merge
  commits of each pull request's latest try build in SQLite.
- **Utilities**: hex decoding (`crater.hex`), size strings (`crater.size`),
  quote-aware splitting (`crater.strings`), path normalisation and disk usage
  (`crater.paths`), string enums, file-name encoding and failure logging
  (`crater.utils`), and an HTTP GET helper with a limited number of redirects
  (`crater.http`).

## Installation

Install the package with your usual Python package installer. It needs
Python 3.11 or newer and depends on `requests`.

## Examples

Toolchains:

```python
from crater.toolchain import Toolchain

tc = Toolchain.parse("stable+rustflags=-Dwarnings")
print(tc)                      # stable+rustflags=-Dwarnings
print(tc.to_path_component())  # stable+rustflags=-Dwarnings
```

Sizes:

```python
from crater.size import Size

print(Size.parse("4G").to_bytes())  # 4294967296
print(Size.parse("512kb"))          # 512K
```

Splitting with quotes:

```python
from crater.strings import split_quoted

split_quoted('a b="c d e" f')  # ['a', 'b=c d e', 'f']
```

Bot commands:

```python
from crater.commands import parse_command

command = parse_command("run name=pr-1 start=stable end=beta")
command.command        # 'run'
command.args["start"]  # Toolchain(source=DistSource(name='stable'), ...)
command.args["mode"]   # None
```

Webhooks:

```python
from crater.webhooks import check_webhook, extract_commands

event = check_webhook("secret", payload, signature_header, event_header)
if event is not None:
    for command in extract_commands(event.comment.body, "my-bot"):
        ...
```

Posting a message:

```python
from crater.github import GitHubApi
from crater.messages import Label, LabelsConfig, Message

github = GitHubApi(token="token")
labels = LabelsConfig("S-waiting-on-crater", "S-waiting-on-review", r"^S-")
Message().line("ping_pong", "**Pong!**").set_label(Label.EXPERIMENT_QUEUED).send(
    github, issue_url, labels, about_url="https://example.com/about"
)
```

Try builds:

```python
from crater.try_builds import TryBuildStore

with TryBuildStore("try_builds.db") as store:
    store.detect(github, "owner/repo", 1, comment_body)
    build = store.get_sha("owner/repo", 1)  # TryBuild or None
```

Hex decoding:

```python
from crater.hex import from_hex

from_hex("00ff10")  # b'\x00\xff\x10'
```

## Errors

Parsers raise exceptions instead of returning status values:
`Toolchain.parse` raises `ToolchainParseError`, `split_quoted` raises
`UnbalancedQuotesError`, `from_hex` raises `InvalidCharError` or
`InvalidLengthError` (both `HexError`), command parsing raises a
`CommandParseError` subclass, `check_webhook` raises `WebhookError`, GitHub
calls raise `GitHubError`, and `crater.http.get` raises `InvalidStatusCode`.

## What this package does not do

It is a library of parts, not a running service. It has no HTTP server and no
command-line program. It parses bot commands but does not carry them out:
there is no experiment database, scheduling of work, or report generation.
It does not authenticate agents, define an agent API, or load a tokens file;
the only storage it keeps is the try-build table of `TryBuildStore`.