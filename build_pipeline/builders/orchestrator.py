"""
Build orchestrator that declares the pipeline tasks
"""

import asyncio
from typing import Any, List, Optional

from .dotnet_builder import DotNetBuilder
from .msbuild_builder import MSBuildBuilder
from .version_builder import VersionBuilder
from ..config import ConfigLoader
from ..matrix import BuildUnit, expand_cli_matrix, find_project, read_target_frameworks
from ..parameters import InvocationParameters, ParameterResolver, PlatformTarget
from ..platform import HostInfo
from ..tasks import Task, TaskGraph
from ..utils import delete_directory, glob_directories, glob_files


class BuildOrchestrator:
    """
    Wires the pipeline tasks into a graph

    PreliminaryCheck -> Clean -> Restore -> {SetVersion, UnitTests} -> Publish
    """

    DEFAULT_TARGET = "Publish"

    def __init__(self,
                 params: InvocationParameters,
                 host: HostInfo,
                 config: ConfigLoader,
                 logger: Any,
                 dotnet: Optional[DotNetBuilder] = None,
                 msbuild: Optional[MSBuildBuilder] = None,
                 version: Optional[VersionBuilder] = None):
        """
        Initialize build orchestrator

        Args:
            params: Invocation parameters, validated by PreliminaryCheck
            host: Host the pipeline runs on
            config: Configuration loader
            logger: Logger instance
            dotnet: dotnet CLI wrapper, built from params when omitted
            msbuild: MSBuild wrapper, built from params when omitted
            version: Version stamper, built from config when omitted
        """
        self.params = params
        self.host = host
        self.config = config
        self.logger = logger
        self.root_dir = params.root

        builder_args = (self.root_dir, params.configuration.value, logger)
        builder_kwargs = {
            "dry_run": params.dry_run,
            "verbosity": config.get_option("verbosity", "quiet"),
        }
        self.dotnet = dotnet or DotNetBuilder(
            *builder_args,
            publish_dir=self.root_dir / config.get_option("publish_dir", "publish"),
            **builder_kwargs,
        )
        self.msbuild = msbuild or MSBuildBuilder(
            *builder_args, uwp_config=config.get_uwp_config(), **builder_kwargs
        )
        self.version = version or VersionBuilder(
            *builder_args, command=config.version_command, **builder_kwargs
        )

        self.resolver = ParameterResolver(host, config.min_windows_version, logger)
        self.graph = self._build_graph()

    def _build_graph(self) -> TaskGraph:
        graph = TaskGraph()

        graph.add(Task(
            "PreliminaryCheck", self.preliminary_check,
            before=("Clean",),
            description="Validate parameters against the host",
        ))
        graph.add(Task(
            "Clean", self.clean,
            depends_on=("PreliminaryCheck",),
            only_when=self._not_debugging,
            description="Delete build output directories",
        ))
        graph.add(Task(
            "Restore", self.restore,
            depends_on=("Clean",),
            only_when=self._not_debugging,
            description="Restore NuGet packages",
        ))
        graph.add(Task(
            "SetVersion", self.set_version,
            dependent_for=("Publish",),
            after=("Restore",),
            only_when=lambda: self.params.is_release,
            description="Stamp the app version (Release only)",
        ))
        graph.add(Task(
            "UnitTests", self.unit_tests,
            dependent_for=("Publish",),
            after=("Restore", "SetVersion"),
            only_when=lambda: self.params.run_tests,
            description="Run every test project",
        ))
        graph.add(Task(
            "Publish", self.publish,
            depends_on=("SetVersion", "Restore"),
            description="Package the requested platform targets",
        ))
        return graph

    def _not_debugging(self) -> bool:
        return not self.params.debugger_attached

    def preliminary_check(self) -> None:
        self.resolver.validate(self.params)

    def clean(self) -> None:
        directories = glob_directories(self.root_dir, self.config.clean_directories)
        self.logger.info(f"Cleaning {len(directories)} directories...")
        for directory in directories:
            delete_directory(directory, self.logger, dry_run=self.params.dry_run)

    def restore(self) -> None:
        asyncio.run(self.dotnet.restore())

    def set_version(self) -> None:
        self.version.stamp(self.root_dir)

    def unit_tests(self) -> None:
        projects = glob_files(self.root_dir, self.config.test_project_pattern)
        if not projects:
            self.logger.warning(f"No test projects match {self.config.test_project_pattern}")
        for project in projects:
            self.dotnet.test(project, verbosity=self.config.test_verbosity)

    def cli_build_units(self) -> List[BuildUnit]:
        """Build units for the CLI app on this host"""
        if not self.params.targets(PlatformTarget.CLI):
            return []
        # Hosts without runtime identifiers never touch the project
        if not self.config.get_runtime_identifiers(self.host.os):
            return []

        project = find_project(self.root_dir, self.config.cli_project)
        frameworks = read_target_frameworks(project)
        self.logger.debug(f"{project.name} targets {', '.join(frameworks) or 'no framework'}")

        return expand_cli_matrix(
            self.host.os,
            self.params.platform_targets,
            frameworks,
            project,
            self.config.get_runtime_table(),
        )

    def publish(self) -> None:
        if self.params.targets(PlatformTarget.WINDOWS_UWP):
            for project in glob_files(self.root_dir, self.config.packaging_project_pattern):
                self.msbuild.package(project)

        if self.params.targets(PlatformTarget.CLI):
            units = self.cli_build_units()
            if not self.config.get_runtime_identifiers(self.host.os):
                self.logger.warning(f"Publishing the CLI app is not supported on {self.host.os} yet")
            elif not units:
                self.logger.warning(f"{self.config.cli_project} declares no target framework")
            for unit in units:
                self.dotnet.publish(unit)
