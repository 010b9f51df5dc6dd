"""Errors raised while building telemetry submitters.

These never reach the code that records sync events: the submitter factory
catches them, logs them, and leaves telemetry disabled.
"""

from __future__ import annotations

import enum


class FormsUrlErrorReason(enum.StrEnum):
    """Why a prefilled form link could not be turned into a submitter."""

    MALFORMED_URL = "malformed_url"
    UNSUPPORTED_HOST = "unsupported_host"
    NO_QUERY_PARAMETERS = "no_query_parameters"
    NO_USABLE_FIELD_MAPPINGS = "no_usable_field_mappings"


class FormsUrlError(ValueError):
    """Raised when a prefilled form link is unusable.

    Attributes
    ----------
    reason
        Machine-readable failure class.

    """

    def __init__(self, message: str, *, reason: FormsUrlErrorReason) -> None:
        """Initialise the error with a message and its failure class."""
        self.reason = reason
        super().__init__(message)

    @classmethod
    def malformed_url(cls, url: str, detail: str) -> FormsUrlError:
        """Create error for a link that cannot be parsed as a URL.

        Parameters
        ----------
        url
            The rejected link.
        detail
            Parser message explaining the rejection.

        Returns
        -------
        FormsUrlError
            Error with reason ``malformed_url``.

        """
        return cls(
            f"Invalid form URL {url!r}: {detail}",
            reason=FormsUrlErrorReason.MALFORMED_URL,
        )

    @classmethod
    def unsupported_host(cls, host: str) -> FormsUrlError:
        """Create error for a link whose host does not serve forms."""
        return cls(
            f"URL is not a Google Forms URL: {host!r}",
            reason=FormsUrlErrorReason.UNSUPPORTED_HOST,
        )

    @classmethod
    def no_query_parameters(cls, url: str) -> FormsUrlError:
        """Create error for a link without any prefilled entries."""
        return cls(
            f"URL has no query parameters: {url}",
            reason=FormsUrlErrorReason.NO_QUERY_PARAMETERS,
        )

    @classmethod
    def no_usable_field_mappings(cls) -> FormsUrlError:
        """Create error for a link where no entry names a known placeholder."""
        return cls(
            "No valid field mappings found in URL. "
            "Make sure to use recognized placeholder values.",
            reason=FormsUrlErrorReason.NO_USABLE_FIELD_MAPPINGS,
        )


class EventStreamConfigError(ValueError):
    """Raised when the event stream client cannot be configured."""

    @classmethod
    def invalid_endpoint(cls, endpoint: str, detail: str) -> EventStreamConfigError:
        """Create error for an endpoint that is not an absolute HTTP(S) URL."""
        return cls(f"Invalid event stream endpoint {endpoint!r}: {detail}")

    @classmethod
    def invalid_batch_size(cls, value: int, maximum: int) -> EventStreamConfigError:
        """Create error for a batch size outside ``1..maximum``."""
        return cls(f"Invalid event stream batch size {value}. Must be 1-{maximum}")

    @classmethod
    def invalid_max_retries(cls, value: int) -> EventStreamConfigError:
        """Create error for a non-positive attempt count."""
        return cls(f"Invalid event stream max retries {value}. Must be positive")
