"""
Host platform detection
"""

import platform
import sys
from dataclasses import dataclass
from typing import Dict, Any, Tuple


@dataclass(frozen=True)
class HostInfo:
    """Operating system the pipeline runs on"""

    os: str
    version: Tuple[int, ...] = ()
    arch: str = "x64"

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"


class PlatformDetector:
    """Detects and provides information about the current platform"""

    # Modules whose presence means a debugger front-end is driving the process
    DEBUGGER_MODULES = ("debugpy", "pydevd")

    def detect(self) -> Dict[str, Any]:
        """
        Detect current platform and architecture

        Returns:
            Dictionary with platform information
        """
        info = {
            "os": platform.system(),
            "platform": self._get_platform_name(),
            "arch": self._get_architecture(),
        }

        if info["platform"] == "windows":
            info["windows_version"] = self._get_windows_version()

        return info

    def host_info(self) -> HostInfo:
        """Detect the host as a HostInfo"""
        info = self.detect()
        return HostInfo(
            os=info["platform"],
            version=info.get("windows_version", ()),
            arch=info["arch"],
        )

    def debugger_attached(self) -> bool:
        """Check whether an interactive debugger is attached to this process"""
        if sys.gettrace() is not None:
            return True
        return any(name in sys.modules for name in self.DEBUGGER_MODULES)

    def _get_platform_name(self) -> str:
        """Get normalized platform name"""
        system = platform.system().lower()

        if system == "windows":
            return "windows"
        elif system == "darwin":
            return "macos"
        elif system == "linux":
            return "linux"
        else:
            return system

    def _get_architecture(self) -> str:
        """Get normalized architecture"""
        machine = platform.machine().lower()
        if machine in ["aarch64", "arm64"]:
            return "arm64"
        elif machine in ["i386", "i686", "x86"]:
            return "x86"
        else:
            return "x64"

    def _get_windows_version(self) -> Tuple[int, ...]:
        """Get (major, minor, build) of the running Windows"""
        getwindowsversion = getattr(sys, "getwindowsversion", None)
        if getwindowsversion is not None:
            version = getwindowsversion()
            return (version.major, version.minor, version.build)

        # platform.version() looks like "10.0.19045"
        parts = []
        for part in platform.version().split("."):
            if not part.isdigit():
                break
            parts.append(int(part))
        return tuple(parts)


__all__ = ["HostInfo", "PlatformDetector"]
