import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from build_pipeline.parameters import (
    Configuration,
    ConfigurationError,
    InvocationParameters,
    ParameterResolver,
    PlatformTarget,
    parse_configuration,
    parse_platform_targets,
)
from build_pipeline.platform import HostInfo


WINDOWS_11 = HostInfo(os="windows", version=(10, 0, 22631))
WINDOWS_8 = HostInfo(os="windows", version=(6, 2, 9200))
MACOS = HostInfo(os="macos")


def _params(*targets, **kwargs):
    return InvocationParameters(platform_targets=tuple(targets), root=Path("."), **kwargs)


def test_missing_platform_targets_is_fatal():
    resolver = ParameterResolver(WINDOWS_11)

    with pytest.raises(ConfigurationError, match="--platform-targets"):
        resolver.validate(_params())


def test_uwp_requires_windows_10():
    resolver = ParameterResolver(WINDOWS_8)

    with pytest.raises(ConfigurationError, match="Windows UWP"):
        resolver.validate(_params(PlatformTarget.WINDOWS_UWP))


def test_uwp_rejected_on_macos():
    resolver = ParameterResolver(MACOS)

    with pytest.raises(ConfigurationError):
        resolver.validate(_params(PlatformTarget.WINDOWS_UWP, PlatformTarget.CLI))


def test_uwp_accepted_on_windows_10_and_later():
    resolver = ParameterResolver(WINDOWS_11)
    params = _params(PlatformTarget.WINDOWS_UWP)

    assert resolver.validate(params) is params
    assert ParameterResolver(HostInfo(os="windows", version=(10, 0, 0))).validate(params) is params


def test_cli_only_accepted_anywhere():
    for host in (WINDOWS_8, MACOS, HostInfo(os="linux")):
        ParameterResolver(host).validate(_params(PlatformTarget.CLI))


def test_success_is_logged():
    messages = []

    class _Logger:
        def info(self, msg):
            messages.append(msg)

    ParameterResolver(MACOS, logger=_Logger()).validate(_params(PlatformTarget.CLI))

    assert messages == ["Preliminary checks are successful."]


def test_defaults():
    params = InvocationParameters()

    assert params.configuration == Configuration.RELEASE
    assert params.is_release
    assert params.run_tests is False
    assert params.platform_targets == ()


def test_parse_platform_targets_aliases_and_duplicates():
    targets = parse_platform_targets(["cli", "UWP", "WindowsUwp", "CLI"])

    assert targets == (PlatformTarget.CLI, PlatformTarget.WINDOWS_UWP)
    assert parse_platform_targets(None) == ()


def test_parse_platform_targets_rejects_unknown():
    with pytest.raises(ConfigurationError, match="Android"):
        parse_platform_targets(["Android"])


def test_parse_configuration():
    assert parse_configuration("debug") == Configuration.DEBUG
    assert parse_configuration("Release") == Configuration.RELEASE
    with pytest.raises(ConfigurationError):
        parse_configuration("Profile")
