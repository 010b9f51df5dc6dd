"""Telemetry submitters and the factory that selects between them.

Public API
----------
TelemetrySubmitter
    Protocol for delivering one sync event to a backend.
FormsSubmitter
    Submits events as Google Forms responses.
StreamSubmitter
    Submits events through the batching event stream client.
Submitter
    Union of the concrete submitter variants.
resolve_submitter
    Factory choosing a submitter from an endpoint string.
FormsUrlError
    Raised when a prefilled form link is unusable.
EventStreamConfigError
    Raised when the event stream client cannot be configured.

Examples
--------
>>> from synctelemetry.submitters import resolve_submitter
>>> submitter = resolve_submitter(
...     "https://docs.google.com/forms/d/e/XYZ/viewform?entry.1=SYNC_TYPE"
... )
>>> submitter.endpoint.base_submission_url
'https://docs.google.com/forms/d/e/XYZ/formResponse'

"""

from __future__ import annotations

from synctelemetry.submitters.errors import (
    EventStreamConfigError,
    FormsUrlError,
    FormsUrlErrorReason,
)
from synctelemetry.submitters.factory import (
    Submitter,
    describe_submitter,
    endpoint_host,
    normalize_endpoint,
    resolve_submitter,
)
from synctelemetry.submitters.forms import FormsSubmitter
from synctelemetry.submitters.protocol import TelemetrySubmitter
from synctelemetry.submitters.stream import StreamSubmitter

__all__ = [
    "EventStreamConfigError",
    "FormsSubmitter",
    "FormsUrlError",
    "FormsUrlErrorReason",
    "StreamSubmitter",
    "Submitter",
    "TelemetrySubmitter",
    "describe_submitter",
    "endpoint_host",
    "normalize_endpoint",
    "resolve_submitter",
]
