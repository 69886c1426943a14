"""
Build pipeline for the UWP package and the cross-platform CLI app
Runs on Windows and macOS; Linux hosts have no CLI publish matrix yet
"""

__version__ = "1.0.0"
__supported_platforms__ = ["windows", "macos"]

from .main import BuildPipeline

__all__ = ["BuildPipeline", "__version__", "__supported_platforms__"]
