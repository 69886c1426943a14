"""
dotnet CLI builder: restore, test and publish
"""

import asyncio
import subprocess
from pathlib import Path
from typing import List, Optional

from .base_builder import BaseBuilder
from ..matrix import BuildUnit


class DotNetBuilder(BaseBuilder):
    """Builder for SDK-style projects driven by the dotnet CLI"""

    tool = "dotnet"

    def __init__(self, *args, publish_dir: Optional[Path] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.publish_dir = Path(publish_dir) if publish_dir else self.root_dir / "publish"

    async def restore(self, target: Optional[Path] = None) -> None:
        """
        Restore NuGet packages for the repository

        Raises:
            subprocess.CalledProcessError: dotnet restore failed
        """
        cmd = [self.executable, "restore"]
        if target is not None:
            cmd.append(str(target))
        cmd_str = " ".join(cmd)
        self.logger.debug(f"Running: {cmd_str}")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would run: {cmd_str}")
            return

        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(self.root_dir),
            env=self.env,
        )
        returncode = await process.wait()
        if returncode != 0:
            self.logger.error(f"Command failed with exit code {returncode}: {cmd_str}")
            raise subprocess.CalledProcessError(returncode, cmd)

    def test_command(self, project_file: Path, verbosity: Optional[str] = None) -> List[str]:
        return [
            self.executable, "test", str(project_file),
            "--configuration", self.configuration,
            "--verbosity", verbosity or self.verbosity,
        ]

    def test(self, project_file: Path, verbosity: Optional[str] = None) -> subprocess.CompletedProcess:
        """Run the tests of one test project"""
        self.logger.info(f"Testing {project_file}...")
        return self.run_command(self.test_command(project_file, verbosity))

    def publish_command(self, unit: BuildUnit) -> List[str]:
        cmd = [
            self.executable, "publish", str(unit.project_path),
            "--configuration", self.configuration,
            "--framework", unit.target_framework,
            "--runtime", unit.runtime_identifier,
            "--self-contained", self._format_value(unit.portable),
            "--verbosity", self.verbosity,
            "--output", str(self.publish_dir / unit.output_path),
        ]
        cmd.extend(self.format_properties({
            "PublishSingleFile": True,
            "PublishReadyToRun": True,
            # Trimming needs a self-contained app
            "PublishTrimmed": unit.portable,
        }))
        return cmd

    def publish(self, unit: BuildUnit) -> subprocess.CompletedProcess:
        """Publish the CLI app for one build unit"""
        self.logger.info(
            f"Publishing {unit.project_path}-{unit.target_framework}-{unit.runtime_identifier}..."
        )
        return self.run_command(self.publish_command(unit))
