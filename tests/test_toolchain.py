import pytest

from crater.toolchain import (
    CiSource,
    CratePatch,
    DistSource,
    Toolchain,
    ToolchainParseError,
)

SHA = "0000000000000000000000000000000000000000"

SOURCES = [
    ("stable", DistSource("stable"), False),
    ("beta-1970-01-01", DistSource("beta-1970-01-01"), False),
    ("nightly-1970-01-01", DistSource("nightly-1970-01-01"), False),
    (f"master#{SHA}", CiSource(SHA), False),
    (f"try#{SHA}", CiSource(SHA), True),
]

PATCH = CratePatch("example", "https://git.example.com/some/repo", "master")


def _variants():
    for text, source, ci_try in SOURCES:
        yield text, Toolchain(source, ci_try=ci_try)
        yield text + "+rustflags=foo bar", Toolchain(
            source, rustflags="foo bar", ci_try=ci_try
        )
        yield text + "+cargoflags=foo bar", Toolchain(
            source, cargoflags="foo bar", ci_try=ci_try
        )
        yield text + "+patch=example=https://git.example.com/some/repo=master", Toolchain(
            source, ci_try=ci_try, patches=(PATCH,)
        )
        yield (
            text + "+rustflags=foo bar+patch=example=https://git.example.com/some/repo=master",
            Toolchain(source, rustflags="foo bar", ci_try=ci_try, patches=(PATCH,)),
        )


@pytest.mark.parametrize(("text", "expected"), list(_variants()))
def test_string_repr(text, expected):
    assert Toolchain.parse(text) == expected
    assert str(expected) == text
    assert Toolchain.parse(str(expected)) == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "master#",
        f"foo#{SHA}",
        "stable+rustflags",
        "stable+rustflags=",
        "stable+donotusethisflag=ever",
        "stable+patch=",
    ],
)
def test_invalid_reprs(text):
    with pytest.raises(ToolchainParseError):
        Toolchain.parse(text)


def test_error_messages():
    with pytest.raises(ToolchainParseError, match="empty toolchain name"):
        Toolchain.parse("")
    with pytest.raises(ToolchainParseError, match="invalid toolchain source name: foo"):
        Toolchain.parse(f"foo#{SHA}")
    with pytest.raises(ToolchainParseError, match="invalid toolchain flag: donotusethisflag"):
        Toolchain.parse("stable+donotusethisflag=ever")


def test_crate_patch_parse_and_str():
    patch = CratePatch.parse("example=https://git.example.com/some/repo=master")
    assert patch == PATCH
    assert str(patch) == "example=https://git.example.com/some/repo=master"


@pytest.mark.parametrize("text", ["example", "a=b", "a=b=c=d"])
def test_crate_patch_invalid(text):
    with pytest.raises(ToolchainParseError):
        CratePatch.parse(text)


def test_bad_patch_in_toolchain():
    with pytest.raises(ToolchainParseError):
        Toolchain.parse("stable+patch=onlyname")


def test_path_component_plain():
    assert Toolchain.parse("stable").to_path_component() == "stable"


def test_path_component_encodes_reserved():
    toolchain = Toolchain.parse("stable+rustflags=-Ca:b/c")
    component = toolchain.to_path_component()
    assert component == "stable+rustflags=-Ca%3Ab%2Fc"
    assert ":" not in component and "/" not in component