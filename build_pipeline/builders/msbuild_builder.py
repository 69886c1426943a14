"""
MSBuild builder for the Windows application packaging project
"""

import subprocess
from pathlib import Path
from typing import Any, Dict, List

from .base_builder import BaseBuilder


class MSBuildBuilder(BaseBuilder):
    """Builds MSIX bundles out of .wapproj packaging projects"""

    tool = "msbuild"

    def __init__(self, *args, uwp_config: Dict[str, Any], **kwargs):
        super().__init__(*args, **kwargs)
        self.uwp_config = uwp_config

    @property
    def package_dir(self) -> Path:
        return self.root_dir / self.uwp_config.get("package_dir", "publish/MSIX")

    @property
    def binlog_path(self) -> Path:
        return self.root_dir / self.uwp_config.get("binlog", "bin/msbuild.binlog")

    def package_command(self, project_file: Path) -> List[str]:
        properties = {"Configuration": self.configuration}
        properties.update(self.uwp_config.get("properties", {}))
        properties["AppxPackageDir"] = self.package_dir
        properties["Platform"] = self.uwp_config.get("target_platform", "x86")

        cmd = [self.executable, str(project_file), "-t:Build"]
        cmd.extend(self.format_properties(properties))
        cmd.extend([
            "-m:1",
            "-restore",
            f"-v:{self.verbosity}",
            f"-bl:{self.binlog_path}",
        ])
        return cmd

    def package(self, project_file: Path) -> subprocess.CompletedProcess:
        """Build and bundle one packaging project"""
        self.logger.info(f"Building {project_file}...")
        return self.run_command(self.package_command(project_file))
