import sys
from pathlib import Path

from pii_enrichment.config.loader import load_config_file
from pii_enrichment.config.settings import Settings
from pii_enrichment.enrichment.enrichment import build_enrichment
from pii_enrichment.enrichment.exceptions import ConfigurationError
from pii_enrichment.logging.logger import Log
from pii_enrichment.worker.event_runner import EventRunner
from pii_enrichment.worker.worker import Worker


def main() -> int:
    """Entry point: load config -> build enrichment -> enrich stdin to stdout."""
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        enrichment = build_enrichment(load_config_file(Path(settings.pii_config_path)))
    except ConfigurationError as exc:
        for error in exc.errors:
            Log.error(f"Configuration error: {error}")
        return 1

    worker = Worker(EventRunner(enrichment, settings))
    if settings.failed_events_path:
        with open(settings.failed_events_path, "a", encoding="utf-8") as failed:
            stats = worker.run(sys.stdin, out=sys.stdout, failed=failed)
    else:
        stats = worker.run(sys.stdin, out=sys.stdout, failed=sys.stderr)
    return 0 if stats.failed == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
