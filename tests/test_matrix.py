import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from build_pipeline.matrix import (
    BuildUnit,
    default_runtime_table,
    expand_cli_matrix,
    find_project,
    read_target_frameworks,
)
from build_pipeline.parameters import PlatformTarget


PROJECT = Path("src/app/dev/platforms/desktop/DevToys.CLI/DevToys.CLI.csproj")
FRAMEWORKS = ["net8.0", "net9.0"]
CLI = (PlatformTarget.CLI,)


def _expand(host_os, targets=CLI, frameworks=FRAMEWORKS):
    return expand_cli_matrix(host_os, targets, frameworks, PROJECT, default_runtime_table())


def test_macos_yields_two_architectures_twice_per_framework():
    units = _expand("macos")

    assert len(units) == 8
    assert {u.runtime_identifier for u in units} == {"osx-x64", "osx-arm64"}
    assert units[:4] == [
        BuildUnit(PROJECT, "osx-x64", "net8.0", False),
        BuildUnit(PROJECT, "osx-x64", "net8.0", True),
        BuildUnit(PROJECT, "osx-arm64", "net8.0", False),
        BuildUnit(PROJECT, "osx-arm64", "net8.0", True),
    ]


def test_windows_yields_three_architectures():
    units = _expand("windows")

    assert len(units) == 12
    assert [u.runtime_identifier for u in units[:6]] == [
        "win10-x64", "win10-x64",
        "win10-arm64", "win10-arm64",
        "win10-x86", "win10-x86",
    ]
    assert {u.target_framework for u in units} == set(FRAMEWORKS)


def test_linux_and_unknown_hosts_yield_nothing():
    assert _expand("linux") == []
    assert _expand("freebsd") == []


def test_nothing_without_cli_target():
    assert _expand("windows", targets=(PlatformTarget.WINDOWS_UWP,)) == []
    assert _expand("windows", targets=()) == []


def test_units_are_unique():
    units = _expand("windows")

    assert len(set(units)) == len(units)


def test_output_path_names_portable_units():
    unit = BuildUnit(PROJECT, "osx-arm64", "net8.0", True)

    assert unit.project_name == "DevToys.CLI"
    assert unit.output_path == "DevToys.CLI-net8.0-osx-arm64-portable"
    assert BuildUnit(PROJECT, "osx-arm64", "net8.0", False).output_path == "DevToys.CLI-net8.0-osx-arm64"


def test_custom_runtime_table():
    units = expand_cli_matrix("linux", CLI, ["net8.0"], PROJECT, {"linux": ["linux-x64"]})

    assert [(u.runtime_identifier, u.portable) for u in units] == [("linux-x64", False), ("linux-x64", True)]


def test_read_target_frameworks(tmp_path):
    project = tmp_path / "App.csproj"
    project.write_text(
        '<Project Sdk="Microsoft.NET.Sdk">\n'
        "  <PropertyGroup>\n"
        "    <OutputType>Exe</OutputType>\n"
        "    <TargetFrameworks>net8.0; net9.0;net8.0</TargetFrameworks>\n"
        "  </PropertyGroup>\n"
        "</Project>\n"
    )

    assert read_target_frameworks(project) == ["net8.0", "net9.0"]


def test_read_single_target_framework_with_namespace(tmp_path):
    project = tmp_path / "Legacy.csproj"
    project.write_text(
        '<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">'
        "<PropertyGroup><TargetFramework>net48</TargetFramework></PropertyGroup>"
        "</Project>"
    )

    assert read_target_frameworks(project) == ["net48"]


def test_find_project(tmp_path):
    project = tmp_path / "src" / "DevToys.CLI" / "DevToys.CLI.csproj"
    project.parent.mkdir(parents=True)
    project.write_text("<Project />")

    assert find_project(tmp_path, "DevToys.CLI") == project
    with pytest.raises(FileNotFoundError):
        find_project(tmp_path, "DevToys.Missing")
