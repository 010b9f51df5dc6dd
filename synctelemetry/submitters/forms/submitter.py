"""Google Forms implementation of the ``TelemetrySubmitter`` protocol."""

from __future__ import annotations

import typing as typ
import urllib.parse

import httpx

from synctelemetry.config import HttpTimeouts
from synctelemetry.logging import get_logger, log_error, log_info

if typ.TYPE_CHECKING:
    from synctelemetry.events.models import SyncEvent
    from synctelemetry.submitters.forms.parser import ParsedFormsEndpoint

logger = get_logger(__name__)


class FormsSubmitter:
    """Submit each sync event as one GET to a form's ``formResponse`` URL.

    Forms accept one response per request, so there is no batching, and a
    failed submission is logged and dropped rather than retried.

    Parameters
    ----------
    endpoint
        Parsed prefilled link describing where and what to submit.
    timeouts
        Per-request timeout budget. Ignored when ``http_client`` is given.
    http_client
        Optional ``httpx.Client`` for testing. If not provided, the
        instance creates and owns its own client.

    """

    def __init__(
        self,
        endpoint: ParsedFormsEndpoint,
        *,
        timeouts: HttpTimeouts | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialise the submitter for one parsed endpoint."""
        self._endpoint = endpoint
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=(timeouts or HttpTimeouts()).to_httpx(),
        )

    @property
    def endpoint(self) -> ParsedFormsEndpoint:
        """Read-only access to the parsed endpoint."""
        return self._endpoint

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def build_submission_url(self, event: SyncEvent) -> str:
        """Return the ``formResponse`` URL carrying ``event``'s values.

        Entries appear in link order. Absent values are submitted as empty
        strings and every value is percent-encoded.

        Parameters
        ----------
        event
            Event whose fields populate the form entries.

        Returns
        -------
        str
            Submission URL with one ``entry=value`` pair per mapping.

        """
        pairs = [
            (mapping.entry_id, mapping.accessor(event) or "")
            for mapping in self._endpoint.field_mappings
        ]
        query = urllib.parse.urlencode(pairs, quote_via=urllib.parse.quote)
        return f"{self._endpoint.base_submission_url}?{query}"

    def submit(self, event: SyncEvent) -> bool:
        """Submit ``event`` to the form.

        Parameters
        ----------
        event
            The sync event to submit.

        Returns
        -------
        bool
            ``True`` when the form answered with a 2xx status, ``False`` for
            any other status, transport error, or timeout.

        """
        submission_url = self.build_submission_url(event)
        log_info(logger, "Submitting to Google Forms: %s", submission_url)

        try:
            response = self._client.get(submission_url)
        except httpx.TimeoutException as exc:
            log_error(
                logger,
                "Google Forms submission timed out: %s",
                exc,
                exc_info=exc,
            )
            return False
        except httpx.HTTPError as exc:
            log_error(
                logger,
                "Failed to submit event to Google Forms: %s",
                exc,
                exc_info=exc,
            )
            return False

        if not response.is_success:
            log_error(
                logger,
                "Google Forms submission failed with HTTP %d",
                response.status_code,
            )
            return False

        log_info(logger, "Successfully submitted event to Google Forms")
        return True
