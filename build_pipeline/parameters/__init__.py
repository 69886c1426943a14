"""
Invocation parameters and their validation
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ..platform import HostInfo


class ConfigurationError(ValueError):
    """Invocation parameters are missing, invalid or unsupported on this host"""


class Configuration(str, Enum):
    DEBUG = "Debug"
    RELEASE = "Release"


class PlatformTarget(str, Enum):
    WINDOWS_UWP = "WindowsUwp"
    CLI = "CLI"


# Accepted spellings on the command line, lowercased
_TARGET_ALIASES = {
    "windowsuwp": PlatformTarget.WINDOWS_UWP,
    "windows-uwp": PlatformTarget.WINDOWS_UWP,
    "uwp": PlatformTarget.WINDOWS_UWP,
    "cli": PlatformTarget.CLI,
}


def parse_configuration(value: str) -> Configuration:
    """Parse a configuration name, case-insensitively"""
    for configuration in Configuration:
        if configuration.value.lower() == str(value).lower():
            return configuration
    choices = ", ".join(c.value for c in Configuration)
    raise ConfigurationError(f"Unknown configuration '{value}'. Expected one of: {choices}")


def parse_platform_targets(values: Optional[Iterable[str]]) -> Tuple[PlatformTarget, ...]:
    """
    Parse platform target names

    Args:
        values: Names as given on the command line, may be None

    Returns:
        Targets in the given order, without duplicates
    """
    targets = []
    for value in values or ():
        target = _TARGET_ALIASES.get(str(value).lower())
        if target is None:
            choices = ", ".join(t.value for t in PlatformTarget)
            raise ConfigurationError(f"Unknown platform target '{value}'. Expected one of: {choices}")
        if target not in targets:
            targets.append(target)
    return tuple(targets)


@dataclass(frozen=True)
class InvocationParameters:
    """Parameters of one pipeline run, fixed once the run starts"""

    configuration: Configuration = Configuration.RELEASE
    platform_targets: Tuple[PlatformTarget, ...] = ()
    run_tests: bool = False
    debugger_attached: bool = False
    root: Path = field(default_factory=Path.cwd)
    dry_run: bool = False

    def targets(self, target: PlatformTarget) -> bool:
        """Check whether a platform target was requested"""
        return target in self.platform_targets

    @property
    def is_release(self) -> bool:
        return self.configuration == Configuration.RELEASE


class ParameterResolver:
    """Validates invocation parameters against the host"""

    def __init__(self, host: HostInfo, min_windows_version: Tuple[int, ...] = (10, 0, 0, 0), logger=None):
        self.host = host
        self.min_windows_version = tuple(min_windows_version)
        self.logger = logger

    def _windows_version_supported(self) -> bool:
        if not self.host.is_windows:
            return False
        # Pad so (10, 0, 19045) compares against (10, 0, 0, 0)
        width = max(len(self.host.version), len(self.min_windows_version))
        version = tuple(self.host.version) + (0,) * (width - len(self.host.version))
        minimum = self.min_windows_version + (0,) * (width - len(self.min_windows_version))
        return version >= minimum

    def validate(self, params: InvocationParameters) -> InvocationParameters:
        """
        Check that the parameters can be built on this host

        Raises:
            ConfigurationError: no platform target, or a target the host
                cannot build
        """
        if not params.platform_targets:
            raise ConfigurationError(
                "Parameter `--platform-targets` is missing. Please check `build-pipeline --help`."
            )

        if params.targets(PlatformTarget.WINDOWS_UWP) and not self._windows_version_supported():
            minimum = ".".join(str(part) for part in self.min_windows_version)
            raise ConfigurationError(
                f"To build Windows UWP app, you need to run on Windows {minimum} or later."
            )

        if self.logger:
            self.logger.info("Preliminary checks are successful.")
        return params


__all__ = [
    "ConfigurationError",
    "Configuration",
    "PlatformTarget",
    "InvocationParameters",
    "ParameterResolver",
    "parse_configuration",
    "parse_platform_targets",
]
