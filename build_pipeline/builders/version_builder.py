"""
Stamps the application version before packaging
"""

import subprocess
from pathlib import Path
from typing import List, Optional

from .base_builder import BaseBuilder


class VersionBuilder(BaseBuilder):
    """Runs the configured version-stamping command in the repository root"""

    def __init__(self, *args, command: List[str], **kwargs):
        super().__init__(*args, **kwargs)
        if not command:
            raise ValueError("No version command configured")
        self.command = list(command)
        self.tool = self.command[0]

    def stamp(self, root: Optional[Path] = None) -> subprocess.CompletedProcess:
        self.logger.info("Setting app version...")
        return self.run_command([self.executable] + self.command[1:], cwd=root, capture_output=True)
