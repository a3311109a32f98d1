"""Tests for the command-line entry point."""

import json
import re
from unittest.mock import patch

import pytest

from buildstamp.__main__ import main
from buildstamp.constants import StampConstants
from buildstamp.settings import Settings
from buildstamp.vcs import GitCommitSource


@pytest.fixture
def settings(tmp_path):
    return Settings(config_dir=tmp_path / "config")


@pytest.fixture
def project(tmp_path, monkeypatch):
    root = tmp_path / "project"
    root.mkdir()
    (root / "package.json").write_text('{"name": "app", "version": "0.0.0"}', encoding="utf-8")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def three_commits():
    with patch.object(GitCommitSource, "query_commits_in_range", return_value=["a", "b", "c"]):
        yield


def _version_pattern(release_type, count):
    return re.compile(rf"\d{{2}}\.\d{{2}}\.\d{{2}}-{release_type}\.{count}")


def test_generate_beta(project, settings, three_commits, capsys):
    assert main(["beta"], settings=settings) == 0

    out, err = capsys.readouterr()
    version = out.strip()
    assert _version_pattern("beta", 3).fullmatch(version)
    # stdout carries nothing but the version
    assert out == version + "\n"
    assert "Version generation completed!" in err

    assert json.loads((project / "package.json").read_text(encoding="utf-8"))["version"] == version
    assert f"'{version}'" in (project / "src" / "version.ts").read_text(encoding="utf-8")


def test_default_type_is_dev(project, settings, three_commits, capsys):
    assert main([], settings=settings) == 0
    assert _version_pattern("dev", 3).fullmatch(capsys.readouterr().out.strip())


def test_default_type_from_settings(project, settings, three_commits, capsys):
    settings.save({"default_type": "release"})
    assert main([], settings=settings) == 0
    assert _version_pattern("release", 3).fullmatch(capsys.readouterr().out.strip())


def test_invalid_type_rejected(project, settings, capsys):
    before = (project / "package.json").read_text(encoding="utf-8")

    assert main(["alpha"], settings=settings) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert 'Invalid version type "alpha"' in err
    assert "Valid types are: dev, beta, release" in err
    assert (project / "package.json").read_text(encoding="utf-8") == before
    assert not (project / "src").exists()


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help(project, settings, capsys, flag):
    assert main(["beta", flag], settings=settings) == 0

    out, _ = capsys.readouterr()
    assert "Usage:" in out
    for release_type in StampConstants.RELEASE_TYPES:
        assert release_type in out
    assert not (project / "src").exists()
    assert json.loads((project / "package.json").read_text(encoding="utf-8"))["version"] == "0.0.0"


def test_help_wins_over_invalid_type(project, settings, capsys):
    assert main(["alpha", "-h"], settings=settings) == 0


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_version(project, settings, capsys, flag):
    assert main([flag], settings=settings) == 0

    out, _ = capsys.readouterr()
    assert StampConstants.TOOL_NAME in out
    assert "Version: 1.0.0" in out
    assert not (project / "src").exists()


def test_unknown_option(project, settings, capsys):
    assert main(["--frobnicate"], settings=settings) == 1
    assert 'Unknown option "--frobnicate"' in capsys.readouterr().err


def test_dry_run(project, settings, three_commits, capsys):
    assert main(["--dry-run", "beta"], settings=settings) == 0

    assert _version_pattern("beta", 3).fullmatch(capsys.readouterr().out.strip())
    assert json.loads((project / "package.json").read_text(encoding="utf-8"))["version"] == "0.0.0"
    assert not (project / "src").exists()


def test_missing_manifest_fails(tmp_path, monkeypatch, settings, three_commits, capsys):
    monkeypatch.chdir(tmp_path)

    assert main(["dev"], settings=settings) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert "Manifest not found or failed to update" in err
    assert "Version generation failed!" in err
    # The build-info file is still written
    assert (tmp_path / "src" / "version.ts").exists()


def test_no_git_uses_one(project, settings, capsys):
    with patch("shutil.which", return_value=None):
        assert main(["release"], settings=settings) == 0
    assert _version_pattern("release", 1).fullmatch(capsys.readouterr().out.strip())


def test_unexpected_exception(project, settings, capsys):
    with patch("buildstamp.__main__.generate", side_effect=RuntimeError("kaboom")):
        assert main(["dev"], settings=settings) == 1

    err = capsys.readouterr().err
    assert "kaboom" in err
    assert "Stack trace:" in err


def test_no_color_output_is_plain(project, settings, three_commits, capsys):
    settings.save({"color": False})
    assert main(["dev"], settings=settings) == 0
    assert "\x1b[" not in capsys.readouterr().err


def test_reads_sys_argv(project, settings, three_commits, capsys, monkeypatch):
    monkeypatch.setattr("sys.argv", ["buildstamp", "beta"])
    assert main(settings=settings) == 0
    assert _version_pattern("beta", 3).fullmatch(capsys.readouterr().out.strip())


def test_set_saves_setting(project, settings, capsys):
    assert main(["--set", "default_type=beta", "--set", "color=false"], settings=settings) == 0

    assert settings.get("default_type") == "beta"
    assert settings.get("color") is False
    out, err = capsys.readouterr()
    assert out == ""
    assert "Saved setting: default_type = beta" in err
    # Saving settings does not generate a version
    assert not (project / "src").exists()


def test_set_then_generate_uses_new_default(project, settings, three_commits, capsys):
    assert main(["--set", "default_type=release"], settings=settings) == 0
    capsys.readouterr()

    assert main([], settings=settings) == 0
    assert _version_pattern("release", 3).fullmatch(capsys.readouterr().out.strip())


@pytest.mark.parametrize("argv", [
    ["--set"],
    ["--set", "default_type"],
    ["--set", "default_type=alpha"],
    ["--set", "theme=dark"],
])
def test_set_rejects_bad_assignments(project, settings, capsys, argv):
    assert main(argv, settings=settings) == 1
    assert "Error:" in capsys.readouterr().err
    assert not settings.path.exists()
