#!/usr/bin/env python3
"""
Main entry point for the build pipeline
Packages the UWP app and publishes the CLI app
"""

import argparse
import subprocess
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Optional

import yaml

from .builders import BuildOrchestrator
from .config import ConfigLoader
from .parameters import (
    ConfigurationError,
    InvocationParameters,
    parse_configuration,
    parse_platform_targets,
)
from .platform import HostInfo, PlatformDetector
from .tasks import TaskGraphError, TaskResult, TaskRunner
from .utils import Logger


class BuildPipeline:
    """Main build pipeline class"""

    def __init__(self,
                 params: InvocationParameters,
                 host: Optional[HostInfo] = None,
                 config: Optional[ConfigLoader] = None,
                 logger: Optional[Logger] = None,
                 verbose: bool = False,
                 log_file: Optional[str] = None,
                 **builders):
        """
        Initialize the build pipeline

        Args:
            params: Invocation parameters
            host: Host information, detected when omitted
            config: Configuration loader, packaged config when omitted
            logger: Logger instance, created when omitted
            verbose: Enable verbose output
            log_file: Optional log file path
            builders: dotnet/msbuild/version builder overrides
        """
        self.params = params
        self.logger = logger or Logger(verbose=verbose, log_file=log_file)
        self.host = host or PlatformDetector().host_info()
        self.config = config or ConfigLoader()

        self.logger.debug(f"Host: {self.host.os} ({self.host.arch})")
        self.logger.debug(f"Root directory: {self.params.root}")

        self.orchestrator = BuildOrchestrator(
            params=params,
            host=self.host,
            config=self.config,
            logger=self.logger,
            **builders
        )

    @property
    def graph(self):
        return self.orchestrator.graph

    def plan(self, target: str = BuildOrchestrator.DEFAULT_TARGET) -> List[str]:
        """Execution order for a target, without running anything"""
        return self.graph.plan(target)

    def run(self,
            target: str = BuildOrchestrator.DEFAULT_TARGET,
            skip: Iterable[str] = ()) -> List[TaskResult]:
        """
        Run a target and everything it requires

        Parameters are validated before any task body even when the
        target does not pull PreliminaryCheck in.

        Raises:
            ConfigurationError: invalid parameters
            TaskGraphError: unknown target or skipped task
            subprocess.CalledProcessError: a tool failed
        """
        skip = list(skip)
        runner = TaskRunner(self.graph, self.logger, skip=skip)

        if "PreliminaryCheck" not in self.plan(target) or "PreliminaryCheck" in skip:
            self.orchestrator.preliminary_check()

        return runner.run(target)

    def show_plan(self, target: str = BuildOrchestrator.DEFAULT_TARGET) -> None:
        """Print the execution plan for a target"""
        from . import __version__

        plan = self.plan(target)
        print(f"\nBuild Pipeline v{__version__}")
        print(f"{'='*50}")
        print(f"Host: {self.host.os} ({self.host.arch})")
        print(f"Root Directory: {self.params.root}")
        print(f"Configuration: {self.params.configuration.value}")
        print(f"Platform targets: {', '.join(t.value for t in self.params.platform_targets) or '-'}")
        print(f"\nPlan for {target}:")
        for line in self.graph.describe(plan):
            print(f"  - {line}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="build-pipeline",
        description="Build pipeline - clean, restore, version, test and publish",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --platform-targets CLI                  # Publish the CLI app
  %(prog)s --platform-targets WindowsUwp CLI       # Package both apps
  %(prog)s --platform-targets CLI --run-tests      # Run unit tests first
  %(prog)s --platform-targets CLI --target Clean   # Only clean
  %(prog)s --platform-targets CLI --plan           # Show the execution plan
        """
    )

    parser.add_argument(
        "--configuration",
        default="Release",
        help="Configuration to build (Debug, Release; default: Release)"
    )

    parser.add_argument(
        "--platform-targets",
        nargs="+",
        metavar="TARGET",
        help="The target platforms (WindowsUwp, CLI)"
    )

    parser.add_argument(
        "--run-tests",
        action="store_true",
        help="Runs unit tests"
    )

    parser.add_argument(
        "--target",
        default=BuildOrchestrator.DEFAULT_TARGET,
        help="Task to run along with everything it requires (default: Publish)"
    )

    parser.add_argument(
        "--skip",
        nargs="+",
        default=[],
        metavar="TASK",
        help="Tasks to skip"
    )

    parser.add_argument(
        "--plan",
        action="store_true",
        help="Show the execution plan and exit"
    )

    parser.add_argument(
        "--root",
        type=Path,
        help="Repository root (default: current directory)"
    )

    parser.add_argument(
        "--debugger-attached",
        action="store_true",
        default=None,
        help="Treat the run as a debugging session: keep build outputs and skip restore "
             "(default: auto-detect)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log tool invocations without running them"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--log-file",
        help="Also write the full log to this file"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Command-line interface"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = Logger(verbose=args.verbose, log_file=args.log_file)
    debugger_attached = args.debugger_attached
    if debugger_attached is None:
        debugger_attached = PlatformDetector().debugger_attached()

    try:
        params = InvocationParameters(
            configuration=parse_configuration(args.configuration),
            platform_targets=parse_platform_targets(args.platform_targets),
            run_tests=args.run_tests,
            debugger_attached=debugger_attached,
            root=(args.root or Path.cwd()).resolve(),
            dry_run=args.dry_run,
        )
        pipeline = BuildPipeline(params, logger=logger)

        if args.plan:
            pipeline.show_plan(args.target)
        else:
            pipeline.run(args.target, skip=args.skip)

    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        sys.exit(130)
    except (ConfigurationError, TaskGraphError, FileNotFoundError) as e:
        logger.error(str(e))
        sys.exit(1)
    except (yaml.YAMLError, ET.ParseError) as e:
        logger.error(f"Malformed file: {e}")
        sys.exit(1)
    except subprocess.CalledProcessError as e:
        logger.error(f"Build failed: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
