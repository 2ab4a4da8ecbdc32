from __future__ import annotations

from relver.services.release.subject_options import SubjectOptions, build


def test_build_flags_and_values() -> None:
    opts = build(["chore: release --prerelease=beta --skip-changelog", "body"])

    assert opts.options == {"prerelease": "beta", "skip-changelog": True}
    assert opts.get("prerelease") == "beta"
    assert opts.flag("skip-changelog") is True
    assert opts.lines == ("chore: release --prerelease=beta --skip-changelog", "body")


def test_build_later_token_wins() -> None:
    opts = build(["--channel=beta", "--channel=stable"])
    assert opts.get("channel") == "stable"


def test_build_names_are_case_insensitive() -> None:
    opts = build(["--Dry-Run"])
    assert "dry-run" in opts
    assert "DRY-RUN" in opts
    assert opts.flag("dry-run") is True


def test_build_ignores_embedded_dashes() -> None:
    opts = build(["fix: handle a--b and x---y", "see http://host/--path"])
    assert opts.options == {}


def test_missing_option_defaults() -> None:
    opts = SubjectOptions()
    assert opts.get("prerelease") is None
    assert opts.get("prerelease", "rc") == "rc"
    assert opts.flag("skip-changelog") is False
