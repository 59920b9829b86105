"""Toolchains used by experiments, and their string representation."""

from __future__ import annotations

from dataclasses import dataclass, field

from crater.utils import encode_filename


class ToolchainParseError(ValueError):
    """A toolchain or crate patch string could not be parsed."""

    @classmethod
    def empty_name(cls) -> ToolchainParseError:
        return cls("empty toolchain name")

    @classmethod
    def invalid_source_name(cls, name: str) -> ToolchainParseError:
        return cls(f"invalid toolchain source name: {name}")

    @classmethod
    def invalid_flag(cls, flag: str) -> ToolchainParseError:
        return cls(f"invalid toolchain flag: {flag}")


@dataclass(frozen=True)
class DistSource:
    """A toolchain from a release channel, such as ``stable`` or ``nightly-2020-01-01``."""

    name: str


@dataclass(frozen=True)
class CiSource:
    """A toolchain built by continuous integration for a given commit."""

    sha: str
    alt: bool = False


@dataclass(frozen=True)
class CratePatch:
    """Replacement of a crate by a branch of a git repository."""

    name: str
    repo: str
    branch: str

    @classmethod
    def parse(cls, text: str) -> CratePatch:
        """Parse ``name=repo=branch``."""
        params = text.split("=")
        if len(params) != 3:
            raise ToolchainParseError.invalid_flag(text)
        name, repo, branch = params
        return cls(name, repo, branch)

    def __str__(self) -> str:
        return f"{self.name}={self.repo}={self.branch}"


@dataclass(frozen=True)
class Toolchain:
    """A toolchain source with optional flags and crate patches."""

    source: DistSource | CiSource
    rustflags: str | None = None
    cargoflags: str | None = None
    ci_try: bool = False
    patches: tuple[CratePatch, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, text: str) -> Toolchain:
        """Parse strings such as ``stable+rustflags=-Dwarnings`` or ``try#<sha>``."""
        raw_source, *flags = text.split("+")

        ci_try = False
        source: DistSource | CiSource
        if "#" in raw_source:
            source_name, _, sha = raw_source.partition("#")
            if not sha:
                raise ToolchainParseError.empty_name()
            if source_name == "try":
                ci_try = True
                source = CiSource(sha)
            elif source_name == "master":
                source = CiSource(sha)
            else:
                raise ToolchainParseError.invalid_source_name(source_name)
        elif not raw_source:
            raise ToolchainParseError.empty_name()
        else:
            source = DistSource(raw_source)

        rustflags: str | None = None
        cargoflags: str | None = None
        patches: list[CratePatch] = []
        for part in flags:
            if "=" not in part:
                raise ToolchainParseError.invalid_flag(part)
            flag, _, value = part.partition("=")
            if not value:
                raise ToolchainParseError.invalid_flag(flag)
            if flag == "rustflags":
                rustflags = value
            elif flag == "cargoflags":
                cargoflags = value
            elif flag == "patch":
                patches.append(CratePatch.parse(value))
            else:
                raise ToolchainParseError.invalid_flag(flag)

        return cls(source, rustflags, cargoflags, ci_try, tuple(patches))

    def to_path_component(self) -> str:
        """Return the toolchain string encoded to be usable as a filename."""
        return encode_filename(str(self))

    def __str__(self) -> str:
        if isinstance(self.source, DistSource):
            parts = [self.source.name]
        else:
            prefix = "try" if self.ci_try else "master"
            parts = [f"{prefix}#{self.source.sha}"]

        if self.rustflags is not None:
            parts.append(f"rustflags={self.rustflags}")
        if self.cargoflags is not None:
            parts.append(f"cargoflags={self.cargoflags}")
        parts.extend(f"patch={patch}" for patch in self.patches)
        return "+".join(parts)