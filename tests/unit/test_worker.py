import io
from unittest.mock import MagicMock

from pii_enrichment.worker.worker import Worker


def _make_worker() -> tuple[Worker, MagicMock]:
    """Create a Worker with a mocked event runner."""
    mock_runner = MagicMock()
    return Worker(mock_runner), mock_runner


class TestWorkerDispatch:
    def test_writes_enriched_lines(self) -> None:
        worker, mock_runner = _make_worker()
        mock_runner.run.side_effect = lambda line: line.upper()
        out, failed = io.StringIO(), io.StringIO()

        stats = worker.run(["a\n", "b\n"], out, failed)

        assert out.getvalue() == "A\nB\n"
        assert failed.getvalue() == ""
        assert stats.processed == 2
        assert stats.failed == 0

    def test_routes_failures(self) -> None:
        worker, mock_runner = _make_worker()
        mock_runner.run.side_effect = [None, "ok"]
        out, failed = io.StringIO(), io.StringIO()

        stats = worker.run(["bad\n", "good\n"], out, failed)

        assert failed.getvalue() == "bad\n"
        assert out.getvalue() == "ok\n"
        assert (stats.processed, stats.failed) == (1, 1)

    def test_skips_blank_lines(self) -> None:
        worker, mock_runner = _make_worker()
        mock_runner.run.return_value = "x"

        worker.run(["\n", "  \n", "a\n"], io.StringIO(), io.StringIO())

        mock_runner.run.assert_called_once_with("a")


class TestWorkerShutdown:
    def test_handles_keyboard_interrupt(self) -> None:
        worker, mock_runner = _make_worker()
        mock_runner.run.side_effect = ["x", KeyboardInterrupt]
        out = io.StringIO()

        stats = worker.run(["a", "b", "c"], out, io.StringIO())

        assert out.getvalue() == "x\n"
        assert stats.processed == 1
