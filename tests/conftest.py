import io

import pytest
from click.testing import CliRunner

from md2roff.dialects import get_dialect
from md2roff.emitter import Emitter
from md2roff.scanner import BlockScanner


class RecordingEmitter(Emitter):
    """Emitter that also keeps every event it renders."""

    def __init__(self, dialect, sink):
        super().__init__(dialect, sink)
        self.events = []

    def emit(self, event):
        self.events.append(event)
        super().emit(event)


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def scan():
    """Runs the block scanner alone and returns (scanner, emitter, output)."""

    def _scan(source: str, dialect: str = "man", max_list_depth: int = 32):
        sink = io.StringIO()
        emitter = RecordingEmitter(get_dialect(dialect), sink)
        scanner = BlockScanner(source, emitter, max_list_depth=max_list_depth)
        scanner.run()
        return scanner, emitter, sink.getvalue()

    return _scan
