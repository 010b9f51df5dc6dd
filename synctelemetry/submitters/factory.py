"""Factory selecting a telemetry submitter from one endpoint string.

The endpoint's host alone decides the backend: links on the forms host get
a ``FormsSubmitter``, anything else is treated as an event stream URL. A
blank endpoint, or one the chosen backend rejects, disables telemetry and
yields ``None`` instead of raising.
"""

from __future__ import annotations

import re

import httpx

from synctelemetry.config import TelemetryConfig
from synctelemetry.observability import SubmissionEventLogger
from synctelemetry.submitters.errors import EventStreamConfigError, FormsUrlError
from synctelemetry.submitters.forms import (
    FormsSubmitter,
    is_forms_host,
    parse_forms_url,
)
from synctelemetry.submitters.stream import (
    EventStreamClient,
    EventStreamConfig,
    StreamSubmitter,
)

_DEFAULT_SCHEME = "https://"
# Only a scheme at the very start counts; URLs inside the query do not.
_LEADING_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

type Submitter = FormsSubmitter | StreamSubmitter

_event_logger = SubmissionEventLogger()


def normalize_endpoint(raw_endpoint: str) -> str:
    """Strip ``raw_endpoint`` and add ``https://`` when it has no scheme.

    Examples
    --------
    >>> normalize_endpoint(" eventstream.example.com ")
    'https://eventstream.example.com'
    >>> normalize_endpoint("http://localhost:8080/events")
    'http://localhost:8080/events'

    """
    endpoint = raw_endpoint.strip()
    if _LEADING_SCHEME.match(endpoint):
        return endpoint
    return f"{_DEFAULT_SCHEME}{endpoint}"


def endpoint_host(endpoint: str) -> str:
    """Return the host of ``endpoint``, or ``""`` when it cannot be parsed."""
    try:
        return httpx.URL(endpoint).host
    except httpx.InvalidURL:
        return ""


def describe_submitter(submitter: Submitter) -> str:
    """Return the short backend name used in log events."""
    match submitter:
        case FormsSubmitter():
            return "forms"
        case StreamSubmitter():
            return "stream"


def _forms_submitter(endpoint: str, config: TelemetryConfig) -> FormsSubmitter | None:
    try:
        parsed = parse_forms_url(endpoint)
    except FormsUrlError as exc:
        _event_logger.log_submitter_disabled(
            reason=exc.reason, endpoint=endpoint, error=exc
        )
        return None
    return FormsSubmitter(parsed, timeouts=config.timeouts)


def _stream_submitter(
    endpoint: str, config: TelemetryConfig
) -> StreamSubmitter | None:
    try:
        stream_config = EventStreamConfig(
            endpoint=endpoint,
            max_batch_size=config.stream_max_batch_size,
            max_retries=config.stream_max_retries,
            timeouts=config.timeouts,
        )
    except EventStreamConfigError as exc:
        _event_logger.log_submitter_disabled(
            reason="invalid_stream_endpoint", endpoint=endpoint, error=exc
        )
        return None
    return StreamSubmitter(
        EventStreamClient(stream_config),
        catalog_name=config.catalog_name,
        app_name=config.app_name,
    )


def resolve_submitter(
    raw_endpoint: str | None,
    *,
    config: TelemetryConfig | None = None,
) -> Submitter | None:
    """Create the submitter for ``raw_endpoint``.

    Parameters
    ----------
    raw_endpoint
        Endpoint as configured. Blank or ``None`` disables telemetry.
        Endpoints without a scheme are treated as HTTPS.
    config
        Timeouts and event stream settings. Defaults are used when omitted;
        ``config.endpoint`` is ignored in favour of ``raw_endpoint``.

    Returns
    -------
    Submitter | None
        A ``FormsSubmitter`` when the host is the forms domain, otherwise a
        ``StreamSubmitter``. ``None`` when telemetry is disabled or the
        endpoint was rejected; the reason is logged.

    Examples
    --------
    >>> resolve_submitter("") is None
    True
    >>> submitter = resolve_submitter("eventstream.example.com")
    >>> describe_submitter(submitter)
    'stream'

    """
    if raw_endpoint is None or not raw_endpoint.strip():
        _event_logger.log_submitter_disabled(reason="no_endpoint")
        return None

    settings = config or TelemetryConfig()
    endpoint = normalize_endpoint(raw_endpoint)

    submitter: Submitter | None
    if is_forms_host(endpoint_host(endpoint)):
        submitter = _forms_submitter(endpoint, settings)
    else:
        submitter = _stream_submitter(endpoint, settings)

    if submitter is not None:
        _event_logger.log_submitter_resolved(
            backend=describe_submitter(submitter), endpoint=endpoint
        )
    return submitter
