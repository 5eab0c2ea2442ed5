"""Tests for the package manager providers — external tools are scripted."""

from __future__ import annotations

import pytest

from crate_migrator.exceptions import ExternalToolError, MetadataParseError, NotImplementedCapability
from crate_migrator.providers.apt import Apt, upstream_version
from crate_migrator.providers.base import PackageManagerKind
from crate_migrator.providers.cargo import Cargo
from crate_migrator.providers.homebrew import Homebrew, parse_stable_version
from crate_migrator.providers.winget import Winget, parse_list_table
from crate_migrator.testing import ScriptedRunner, brew_info_json

# ── Homebrew ──


class TestHomebrew:
    def test_list_installed(self, brew_runner):
        assert Homebrew(brew_runner).list_installed() == ["ripgrep", "curl"]

    def test_list_installed_ignores_blank_lines(self):
        runner = ScriptedRunner({"brew list --formula": ["fd", "", "  bat  "]})
        assert Homebrew(runner).list_installed() == ["fd", "bat"]

    def test_list_installed_tool_missing_raises(self):
        with pytest.raises(ExternalToolError):
            Homebrew(ScriptedRunner({})).list_installed()

    def test_has_target_dependency(self, brew_runner):
        brew = Homebrew(brew_runner)
        assert brew.has_target_dependency("ripgrep") is True
        assert brew.has_target_dependency("curl") is False

    def test_resolve_version(self, brew_runner):
        assert Homebrew(brew_runner).resolve_version("ripgrep") == "14.1.0"

    def test_resolve_version_empty_object(self):
        runner = ScriptedRunner({"brew info --json=v1 fd": ["{}"]})
        assert Homebrew(runner).resolve_version("fd") is None

    def test_resolve_version_invalid_json(self):
        runner = ScriptedRunner({"brew info --json=v1 fd": ["not json ["]})
        assert Homebrew(runner).resolve_version("fd") is None

    def test_resolve_version_multiline_json(self):
        payload = ["[", '  {"versions": {"stable": "9.0.0"}}', "]"]
        runner = ScriptedRunner({"brew info --json=v1 fd": payload})
        assert Homebrew(runner).resolve_version("fd") == "9.0.0"

    def test_resolve_version_tool_error_propagates(self):
        runner = ScriptedRunner(
            {"brew info --json=v1 fd": ExternalToolError("brew info --json=v1 fd", "exit 1")}
        )
        with pytest.raises(ExternalToolError):
            Homebrew(runner).resolve_version("fd")

    def test_format_commands(self):
        brew = Homebrew(ScriptedRunner({}))
        assert brew.format_uninstall_command("ripgrep") == "brew uninstall ripgrep"
        assert brew.format_install_command("ripgrep@14.1.0") == "cargo install ripgrep@14.1.0"

    def test_format_quotes_shell_metacharacters(self):
        brew = Homebrew(ScriptedRunner({}))
        assert brew.format_uninstall_command("x; rm -rf ~") == "brew uninstall 'x; rm -rf ~'"

    def test_kind(self):
        assert Homebrew(ScriptedRunner({})).kind is PackageManagerKind.HOMEBREW


class TestParseStableVersion:
    def test_valid(self):
        assert parse_stable_version(brew_info_json("1.2.3")[0]) == "1.2.3"

    @pytest.mark.parametrize(
        "payload",
        ["{}", "[]", '[{"versions": {}}]', '[{"versions": {"stable": null}}]', '["x"]', ""],
    )
    def test_malformed(self, payload):
        with pytest.raises(MetadataParseError):
            parse_stable_version(payload)


# ── Apt ──


class TestApt:
    def test_list_installed(self):
        runner = ScriptedRunner(
            {
                "apt list --installed": [
                    "Listing... Done",
                    "fd-find/jammy,now 8.3.1-1ubuntu0.1 amd64 [installed]",
                    "ripgrep/jammy,now 13.0.0-2ubuntu0.1 amd64 [installed]",
                    "",
                ]
            }
        )
        assert Apt(runner).list_installed() == ["fd-find", "ripgrep"]

    def test_list_installed_collapses_multiarch_duplicates(self):
        runner = ScriptedRunner(
            {
                "apt list --installed": [
                    "Listing... Done",
                    "libzstd1/jammy,now 1.4.8+dfsg-3build1 amd64 [installed]",
                    "ripgrep/jammy,now 13.0.0-2ubuntu0.1 amd64 [installed]",
                    "libzstd1/jammy,now 1.4.8+dfsg-3build1 i386 [installed]",
                    "libgcc-s1:i386/jammy,now 12.3.0-1ubuntu1 i386 [installed]",
                    "libgcc-s1/jammy,now 12.3.0-1ubuntu1 amd64 [installed]",
                ]
            }
        )
        assert Apt(runner).list_installed() == ["libzstd1", "ripgrep", "libgcc-s1"]

    def test_has_target_dependency(self):
        runner = ScriptedRunner(
            {
                "apt show ripgrep": ["Package: ripgrep", "Built-Using: rust-aho-corasick (= 0.7.18-1)"],
                "apt show curl": ["Package: curl", "Depends: libcurl4"],
            }
        )
        apt = Apt(runner)
        assert apt.has_target_dependency("ripgrep") is True
        assert apt.has_target_dependency("curl") is False

    def test_resolve_version(self):
        runner = ScriptedRunner({"dpkg-query -W -f=${Version} ripgrep": ["13.0.0-2ubuntu0.1"]})
        assert Apt(runner).resolve_version("ripgrep") == "13.0.0"

    def test_resolve_version_empty(self):
        runner = ScriptedRunner({"dpkg-query -W -f=${Version} ripgrep": []})
        assert Apt(runner).resolve_version("ripgrep") is None

    def test_format_uninstall(self):
        assert Apt(ScriptedRunner({})).format_uninstall_command("ripgrep") == "apt remove ripgrep"


class TestUpstreamVersion:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("13.0.0-2ubuntu0.1", "13.0.0"),
            ("1:2.3.4-1", "2.3.4"),
            ("0.10.3+dfsg-1", "0.10.3"),
            ("8.3.1", "8.3.1"),
            ("git20200101-1", None),
        ],
    )
    def test_upstream_version(self, raw, expected):
        assert upstream_version(raw) == expected


# ── Winget ──

_WINGET_TABLE = [
    "Name                 Id                        Version   Available Source",
    "-------------------------------------------------------------------------",
    "ripgrep              BurntSushi.ripgrep.MSVC   14.1.0              winget",
    "Git                  Git.Git                   2.44.0    2.45.0    winget",
]


class TestWinget:
    def test_parse_list_table(self):
        assert parse_list_table(_WINGET_TABLE) == ["BurntSushi.ripgrep.MSVC", "Git.Git"]

    def test_parse_list_table_without_separator(self):
        assert parse_list_table(["No installed package found matching input criteria."]) == []

    def test_list_installed_passes_source_as_separate_args(self):
        runner = ScriptedRunner({"winget list --source winget": _WINGET_TABLE})
        assert Winget(runner).list_installed() == ["BurntSushi.ripgrep.MSVC", "Git.Git"]

    def test_dependency_detection_not_implemented(self):
        with pytest.raises(NotImplementedCapability) as exc_info:
            Winget(ScriptedRunner({})).has_target_dependency("Git.Git")
        assert exc_info.value.manager == "winget"

    def test_resolve_version_none(self):
        assert Winget(ScriptedRunner({})).resolve_version("Git.Git") is None

    def test_format_uninstall(self):
        assert Winget(ScriptedRunner({})).format_uninstall_command("Git.Git") == "winget uninstall Git.Git"


# ── Cargo ──


class TestCargo:
    def test_never_a_source(self):
        runner = ScriptedRunner({})
        assert Cargo(runner).list_installed() == []
        assert runner.calls == []

    def test_always_target_dependency(self):
        assert Cargo(ScriptedRunner({})).has_target_dependency("anything") is True

    def test_resolve_version(self):
        runner = ScriptedRunner(
            {
                "cargo search --limit 1 ripgrep": [
                    'ripgrep = "14.1.0"    # ripgrep is a line-oriented search tool',
                    "... and 120 crates more (use --limit N to see more)",
                ]
            }
        )
        assert Cargo(runner).resolve_version("ripgrep") == "14.1.0"

    def test_resolve_version_name_mismatch(self):
        runner = ScriptedRunner({"cargo search --limit 1 rg": ['rg-lib = "0.1.0"    # other']})
        assert Cargo(runner).resolve_version("rg") is None

    def test_resolve_version_no_results(self):
        runner = ScriptedRunner({"cargo search --limit 1 zzz": []})
        assert Cargo(runner).resolve_version("zzz") is None

    def test_format_commands(self):
        cargo = Cargo(ScriptedRunner({}))
        assert cargo.format_uninstall_command("fd-find") == "cargo uninstall fd-find"
        assert cargo.format_install_command("fd-find@9.0.0") == "cargo install fd-find@9.0.0"


class TestPrerequisites:
    def test_missing_executable(self):
        brew = Homebrew(ScriptedRunner({}, available=set()))
        assert brew.check_prerequisites() == ["'brew' not found on PATH"]

    def test_available(self):
        apt = Apt(ScriptedRunner({}, available={"apt"}))
        assert apt.check_prerequisites() == []
