import json

from pii_enrichment.config.settings import Settings
from pii_enrichment.enrichment.enrichment import PiiPseudonymizerEnrichment
from pii_enrichment.enrichment.exceptions import MalformedEventField
from pii_enrichment.event.models import EnrichedEvent
from pii_enrichment.logging.logger import Log


class EventRunner:
    """Run the enrichment on one encoded event and handle per-event failures."""

    def __init__(
        self,
        enrichment: PiiPseudonymizerEnrichment,
        settings: Settings,
    ) -> None:
        self._enrichment = enrichment
        self._settings = settings

    def run(self, line: str) -> str | None:
        """Return the enriched event line, or ``None`` if the event failed.

        Raises:
            MalformedEventField, ValueError: only when ``fail_fast`` is set.
        """
        try:
            event = self._decode(line)
        except ValueError as exc:
            Log.error(f"Event rejected, undecodable line: {type(exc).__name__}")
            return self._handle_failure(exc)
        try:
            self._enrichment.transform(event)
        except MalformedEventField as exc:
            Log.error(f"Event rejected, malformed field '{exc.field_name}'")
            return self._handle_failure(exc)
        return self._encode(event)

    def _encode(self, event: EnrichedEvent) -> str:
        encoded = json.dumps(event.to_dict(), separators=(",", ":"), ensure_ascii=False)
        try:
            encoded.encode("utf-8")
        except UnicodeEncodeError:
            # Lone surrogates can only travel as JSON escapes.
            return json.dumps(event.to_dict(), separators=(",", ":"))
        return encoded

    def _decode(self, line: str) -> EnrichedEvent:
        raw = json.loads(line)
        if not isinstance(raw, dict):
            raise ValueError("Event line must be a JSON object")
        return EnrichedEvent.from_dict(raw)

    def _handle_failure(self, exc: Exception) -> None:
        if self._settings.fail_fast:
            raise exc
        return None
