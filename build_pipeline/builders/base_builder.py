"""
Base builder class that all toolchain wrappers inherit from
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence


class BaseBuilder:
    """Runs one external build tool with logging and dry-run support"""

    # Executable name, resolved on PATH
    tool: str = ""

    def __init__(self,
                 root_dir: Path,
                 configuration: str,
                 logger: Any,
                 dry_run: bool = False,
                 verbosity: str = "quiet"):
        """
        Initialize base builder

        Args:
            root_dir: Repository root, working directory for commands
            configuration: Build configuration (Debug, Release)
            logger: Logger instance
            dry_run: If True, log commands instead of running them
            verbosity: Verbosity passed to the tool
        """
        self.root_dir = Path(root_dir)
        self.configuration = configuration
        self.logger = logger
        self.dry_run = dry_run
        self.verbosity = verbosity
        self.env = os.environ.copy()

    @property
    def executable(self) -> str:
        """Full path of the tool, or its bare name when not on PATH"""
        return shutil.which(self.tool) or self.tool

    def run_command(self,
                    cmd: Sequence[Any],
                    cwd: Optional[Path] = None,
                    env: Optional[Dict[str, str]] = None,
                    capture_output: bool = False) -> subprocess.CompletedProcess:
        """
        Run a command and wait for it to exit

        Args:
            cmd: Command and arguments
            cwd: Working directory, defaults to the repository root
            env: Environment variables
            capture_output: Capture stdout/stderr instead of streaming them

        Returns:
            CompletedProcess instance

        Raises:
            subprocess.CalledProcessError: the command exited non-zero
        """
        cmd = [str(c) for c in cmd]
        cwd = cwd or self.root_dir
        cmd_str = " ".join(cmd)
        self.logger.debug(f"Running: {cmd_str}")
        self.logger.debug(f"  in: {cwd}")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would run: {cmd_str}")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=env or self.env,
                check=True,
                capture_output=capture_output,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            self.logger.error(f"Command failed with exit code {e.returncode}: {cmd_str}")
            if e.stdout:
                self.logger.error(f"stdout: {e.stdout}")
            if e.stderr:
                self.logger.error(f"stderr: {e.stderr}")
            raise

        if result.stdout:
            self.logger.debug(result.stdout.rstrip())
        return result

    def format_properties(self, properties: Dict[str, Any]) -> List[str]:
        """Render MSBuild properties as ``-p:Name=Value`` switches"""
        return [f"-p:{name}={self._format_value(value)}" for name, value in properties.items()]

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
