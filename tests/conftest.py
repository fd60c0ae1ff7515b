"""
Pytest configuration and shared fixtures for xcsetup tests.
"""

import pytest
from pathlib import Path
from typing import Dict

from xcsetup.config.parser import SetupConfig


RUNNER_VARIABLES = (
    "RUNNER_TOOL_CACHE",
    "RUNNER_TEMP",
    "RUNNER_DEBUG",
    "XCSETUP_CONFIG",
    "GITHUB_OUTPUT",
    "GITHUB_PATH",
    "INPUT_COMPILER",
    "INPUT_VERSION",
    "INPUT_INSTALL-DIR",
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch):
    """Keep the developer's or CI runner's environment out of the tests."""
    for name in RUNNER_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path) -> SetupConfig:
    """Configuration with cache and download directories under tmp_path."""
    return SetupConfig(
        tool_cache_dir=tmp_path / "toolcache",
        temp_dir=tmp_path / "downloads",
    )


@pytest.fixture
def actions_env(tmp_path, monkeypatch) -> Dict[str, Path]:
    """Runner command files, as provided to a workflow step."""
    output_file = tmp_path / "github_output"
    path_file = tmp_path / "github_path"
    output_file.touch()
    path_file.touch()

    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    monkeypatch.setenv("GITHUB_PATH", str(path_file))
    monkeypatch.setenv("PATH", "/usr/bin:/bin")

    return {"output": output_file, "path": path_file}


def parse_output_file(output_file: Path) -> Dict[str, str]:
    """Parse a GITHUB_OUTPUT file written with heredoc delimiters."""
    outputs: Dict[str, str] = {}
    lines = output_file.read_text(encoding="utf-8").splitlines()
    i = 0
    while i < len(lines):
        name, delimiter = lines[i].split("<<", 1)
        value_lines = []
        i += 1
        while lines[i] != delimiter:
            value_lines.append(lines[i])
            i += 1
        outputs[name] = "\n".join(value_lines)
        i += 1
    return outputs


@pytest.fixture
def read_outputs():
    """Return a parser for GITHUB_OUTPUT files."""
    return parse_output_file
