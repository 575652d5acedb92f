"""Shared test fixtures for the filescan test suite."""

import json
import sys

import pytest
from pathlib import Path

from filescan.security.registry import DefaultStrategyRegistry
from filescan.security.scanner_base import ScannerStrategy
from filescan.security.models import ScanVerdict


FAKE_SCANNER_TEMPLATE = """\
import json
import sys
import time

args = sys.argv[1:]
with open({record!r}, "w") as f:
    json.dump(args, f)
time.sleep({sleep!r})
sys.stdout.write({stdout!r}.replace("{{path}}", args[-1] if args else ""))
sys.stderr.write({stderr!r})
sys.exit({exit_code!r})
"""


@pytest.fixture
def tmp_tools_dir(tmp_path):
    """Temporary directory for tool binaries."""
    d = tmp_path / "tools"
    d.mkdir()
    return d


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text("hello")
    return path


class FakeScanner:
    """A Python script standing in for clamscan.

    ``{path}`` in the configured stdout is replaced with the scanned path;
    the arguments the script received are recorded as JSON.
    """

    def __init__(self, directory: Path):
        self.directory = directory
        self.script = directory / "fake_clamscan.py"
        self.record = directory / "fake_clamscan_args.json"
        self.configure()

    def configure(self, stdout="{path}: OK\n", stderr="", exit_code=0, sleep=0):
        self.script.write_text(
            FAKE_SCANNER_TEMPLATE.format(
                record=str(self.record),
                stdout=stdout,
                stderr=stderr,
                exit_code=exit_code,
                sleep=sleep,
            )
        )
        return self

    @property
    def executable(self) -> str:
        return sys.executable

    @property
    def flags(self):
        return [str(self.script)]

    def received_args(self):
        return json.loads(self.record.read_text())


@pytest.fixture
def fake_scanner(tmp_path):
    d = tmp_path / "fake_tool"
    d.mkdir()
    return FakeScanner(d)


class CountingStrategy(ScannerStrategy):
    """Test double that counts scans and returns a fixed verdict or error."""

    def __init__(self, infected=False, error=None):
        self.infected = infected
        self.error = error
        self.calls = []

    def scan(self, path):
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        if self.infected:
            return ScanVerdict.infected_with(path, signature="Test-Signature")
        return ScanVerdict.clean(path)


@pytest.fixture
def counting_strategy():
    return CountingStrategy()


@pytest.fixture
def registry(counting_strategy):
    """Registry whose baseline is a CountingStrategy instead of clamscan."""
    return DefaultStrategyRegistry(factory=lambda: counting_strategy)


@pytest.fixture
def make_strategy():
    """Factory for extra CountingStrategy instances."""
    return CountingStrategy
