from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

from pii_enrichment.logging.logger import Log
from pii_enrichment.worker.event_runner import EventRunner


@dataclass
class WorkerStats:
    processed: int = 0
    failed: int = 0


class Worker:
    """Read loop: decode -> enrich -> route to output or failure stream."""

    def __init__(self, event_runner: EventRunner) -> None:
        self._event_runner = event_runner

    def run(self, lines: Iterable[str], out: TextIO, failed: TextIO) -> WorkerStats:
        """Enrich every non-blank line of *lines*.

        Enriched events go to *out*; lines whose event could not be enriched
        are copied unchanged to *failed*. Stops early on KeyboardInterrupt.
        """
        Log.info("Worker started, reading events")
        stats = WorkerStats()
        try:
            for line in lines:
                line = line.strip()
                if not line:
                    continue
                result = self._event_runner.run(line)
                if result is None:
                    failed.write(line + "\n")
                    stats.failed += 1
                else:
                    out.write(result + "\n")
                    stats.processed += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info(f"Worker finished: {stats.processed} enriched, {stats.failed} failed")
        return stats
