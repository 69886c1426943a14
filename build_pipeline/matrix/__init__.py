"""
Publish matrix for the cross-platform CLI app

Expansion is a pure function of the host OS, the requested targets and the
frameworks the project declares, so it can be checked without a toolchain.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from ..config import ConfigLoader
from ..parameters import PlatformTarget


@dataclass(frozen=True)
class RuntimeTarget:
    runtime_identifier: str
    portable: bool


@dataclass(frozen=True)
class BuildUnit:
    """One ``dotnet publish`` invocation"""

    project_path: Path
    runtime_identifier: str
    target_framework: str
    portable: bool

    @property
    def project_name(self) -> str:
        return Path(self.project_path).stem

    @property
    def output_path(self) -> str:
        """Directory name under the publish directory"""
        name = f"{self.project_name}-{self.target_framework}-{self.runtime_identifier}"
        return f"{name}-portable" if self.portable else name


def runtime_targets(runtime_identifiers: Iterable[str]) -> List[RuntimeTarget]:
    """Each runtime identifier, framework-dependent first then portable"""
    return [
        RuntimeTarget(rid, portable)
        for rid in runtime_identifiers
        for portable in (False, True)
    ]


def expand_cli_matrix(host_os: str,
                      platform_targets: Sequence[PlatformTarget],
                      target_frameworks: Sequence[str],
                      project_path: Path,
                      runtime_table: Mapping[str, Sequence[str]]) -> List[BuildUnit]:
    """
    Build units for publishing the CLI app from this host

    Args:
        host_os: Host platform name (windows, macos, linux)
        platform_targets: Requested platform targets
        target_frameworks: Frameworks declared by the CLI project
        project_path: Path of the CLI project file
        runtime_table: Runtime identifiers per host OS

    Returns:
        One unit per framework, runtime identifier and portability.
        Empty when the CLI target was not requested or the host has no
        runtime identifiers (Linux for now).
    """
    if PlatformTarget.CLI not in platform_targets:
        return []

    targets = runtime_targets(runtime_table.get(host_os, ()))
    return [
        BuildUnit(Path(project_path), target.runtime_identifier, framework, target.portable)
        for framework in target_frameworks
        for target in targets
    ]


def _local_name(tag: str) -> str:
    # Old-style project files carry the msbuild namespace
    return tag.rsplit("}", 1)[-1]


def read_target_frameworks(project_file: Path) -> List[str]:
    """
    Frameworks declared by an SDK-style project file

    Reads ``<TargetFramework>`` and ``<TargetFrameworks>``; the latter is
    semicolon separated. Declaration order is kept, duplicates dropped.
    """
    root = ET.parse(str(project_file)).getroot()

    frameworks: List[str] = []
    for element in root.iter():
        if _local_name(element.tag) not in ("TargetFramework", "TargetFrameworks"):
            continue
        for value in (element.text or "").split(";"):
            value = value.strip()
            if value and value not in frameworks:
                frameworks.append(value)
    return frameworks


def find_project(root: Path, name: str) -> Path:
    """
    Locate ``<name>.csproj`` anywhere under root

    Raises:
        FileNotFoundError: no such project
    """
    matches = sorted(Path(root).glob(f"**/{name}.csproj"))
    if not matches:
        raise FileNotFoundError(f"Project {name}.csproj not found under {root}")
    return matches[0]


def default_runtime_table() -> Dict[str, List[str]]:
    """Runtime table from the packaged platforms.yaml"""
    return ConfigLoader().get_runtime_table()


__all__ = [
    "BuildUnit",
    "RuntimeTarget",
    "runtime_targets",
    "expand_cli_matrix",
    "read_target_frameworks",
    "find_project",
    "default_runtime_table",
]
