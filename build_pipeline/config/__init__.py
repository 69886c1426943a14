"""
Configuration management for the build pipeline
"""

import yaml
from pathlib import Path
from typing import Dict, List, Any, Optional, Tuple


DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent


class ConfigLoader:
    """Loads and manages build pipeline configuration"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration loader

        Args:
            config_dir: Directory containing configuration files,
                defaults to the files shipped with the package
        """
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR

        self.pipeline_config = self._load("pipeline.yaml")
        self.platforms_config = self._load("platforms.yaml")

    def _load(self, file_name: str) -> Dict[str, Any]:
        path = self.config_dir / file_name
        if not path.exists():
            raise FileNotFoundError(f"Pipeline config not found: {path}")

        with open(path, 'r', encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _section(self, name: str) -> Dict[str, Any]:
        return self.pipeline_config.get(name) or {}

    @property
    def cli_project(self) -> str:
        """Name of the CLI project file, without extension"""
        return self._section("cli").get("project", "DevToys.CLI")

    @property
    def test_project_pattern(self) -> str:
        return self._section("tests").get("project_pattern", "**/*Tests.csproj")

    @property
    def test_verbosity(self) -> str:
        return self._section("tests").get("verbosity", self.get_option("verbosity", "quiet"))

    @property
    def packaging_project_pattern(self) -> str:
        return self._section("uwp").get("packaging_project_pattern", "**/*.wapproj")

    @property
    def clean_directories(self) -> List[str]:
        return list(self._section("clean").get("directories", ["bin", "obj", "publish"]))

    @property
    def version_command(self) -> List[str]:
        return [str(part) for part in self._section("version").get("command", [])]

    @property
    def min_windows_version(self) -> Tuple[int, ...]:
        """Minimum Windows version able to build the UWP package"""
        raw = str(self._section("uwp").get("min_windows_version", "10.0.0.0"))
        return tuple(int(part) for part in raw.split("."))

    def get_uwp_config(self) -> Dict[str, Any]:
        """Get the UWP packaging section"""
        return self._section("uwp")

    def get_runtime_identifiers(self, host_os: str) -> List[str]:
        """
        Get the CLI runtime identifiers published from a host

        Args:
            host_os: Host platform name (windows, macos, linux)

        Returns:
            Runtime identifiers, empty for hosts without a publish matrix
        """
        platforms = self.platforms_config.get("platforms", {})
        return list((platforms.get(host_os) or {}).get("runtime_identifiers", []))

    def get_runtime_table(self) -> Dict[str, List[str]]:
        """Get runtime identifiers for every configured host"""
        platforms = self.platforms_config.get("platforms", {})
        return {name: self.get_runtime_identifiers(name) for name in platforms}

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a build option

        Args:
            key: Option key
            default: Default value if not found

        Returns:
            Option value
        """
        return self._section("build_options").get(key, default)


__all__ = ["ConfigLoader", "DEFAULT_CONFIG_DIR"]
