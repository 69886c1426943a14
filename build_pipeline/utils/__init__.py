"""
Utility modules for the build pipeline
"""

import copy
import logging
import shutil
import sys
from pathlib import Path
from typing import Iterable, List, Optional


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'SUCCESS': '\033[92m',  # Bright Green
        'RESET': '\033[0m'
    }

    def format(self, record):
        if sys.stdout.isatty():
            # Other handlers share the record, color a copy only
            record = copy.copy(record)
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']

            record.levelname = f"{color}{record.levelname}{reset}"
            record.msg = f"{color}{record.getMessage()}{reset}"
            record.args = ()

        return super().format(record)


class Logger:
    """Build pipeline logger"""

    SUCCESS = 25  # Between INFO and WARNING
    NAME = "build_pipeline"

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger

        Args:
            verbose: Enable verbose output
            log_file: Optional log file path
        """
        self.verbose = verbose

        logging.addLevelName(self.SUCCESS, "SUCCESS")

        self.logger = logging.getLogger(self.NAME)
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)

        # Close and remove handlers from a previous pipeline in the same process
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        if verbose:
            fmt = "%(asctime)s [%(levelname)s] %(message)s"
        else:
            fmt = "[%(levelname)s] %(message)s"

        console_handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        """Log debug message"""
        self.logger.debug(msg)

    def info(self, msg: str):
        """Log info message"""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Log warning message"""
        self.logger.warning(msg)

    def error(self, msg: str):
        """Log error message"""
        self.logger.error(msg)

    def success(self, msg: str):
        """Log success message"""
        self.logger.log(self.SUCCESS, msg)


def glob_files(root: Path, pattern: str) -> List[Path]:
    """
    Find files under root matching a glob pattern

    Args:
        root: Directory to search
        pattern: Glob pattern such as ``**/*Tests.csproj``

    Returns:
        Matching files, sorted for a stable invocation order
    """
    return sorted(p for p in Path(root).glob(pattern) if p.is_file())


def glob_directories(root: Path, patterns: Iterable[str]) -> List[Path]:
    """
    Find directories under root matching any of the glob patterns

    A bare name like ``bin`` only matches ``<root>/bin``; use ``**/bin`` to
    match at any depth. Matches nested inside another match are dropped
    since deleting the outer directory removes them as well.

    Args:
        root: Directory to search
        patterns: Glob patterns relative to root

    Returns:
        Matching directories, outermost only, sorted
    """
    matches = sorted({
        p for pattern in patterns for p in Path(root).glob(pattern)
        if p.is_dir()
    })

    outermost: List[Path] = []
    for path in matches:
        if not any(parent in path.parents for parent in outermost):
            outermost.append(path)
    return outermost


def delete_directory(path: Path, logger: Optional[Logger] = None, dry_run: bool = False) -> None:
    """Remove a directory tree if it exists"""
    path = Path(path)
    if not path.exists():
        return
    if logger:
        logger.debug(f"Removing {path}")
    if not dry_run:
        shutil.rmtree(path)


__all__ = ["ColoredFormatter", "Logger", "glob_files", "glob_directories", "delete_directory"]
