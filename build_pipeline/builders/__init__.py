"""
Builder components wrapping the external toolchains
"""

from .base_builder import BaseBuilder
from .dotnet_builder import DotNetBuilder
from .msbuild_builder import MSBuildBuilder
from .version_builder import VersionBuilder
from .orchestrator import BuildOrchestrator

__all__ = [
    "BaseBuilder",
    "DotNetBuilder",
    "MSBuildBuilder",
    "VersionBuilder",
    "BuildOrchestrator"
]
