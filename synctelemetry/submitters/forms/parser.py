"""Parse prefilled Google Forms links into field mappings.

A form owner creates a prefilled link whose entry values are placeholder
names rather than real answers::

    https://docs.google.com/forms/d/e/<id>/viewform?entry.11=SYNC_TYPE&entry.12=SYNC_TIME

Parsing turns that link into the ``formResponse`` URL used for programmatic
submission, plus the ordered list of entries and the event fields that feed
them. Entries naming an unknown placeholder are skipped so that a form built
against a newer vocabulary still works with the fields this version knows.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import httpx

from synctelemetry.logging import get_logger, log_info, log_warning
from synctelemetry.submitters.errors import FormsUrlError
from synctelemetry.submitters.forms.placeholders import lookup_placeholder

if typ.TYPE_CHECKING:
    from synctelemetry.submitters.forms.placeholders import FieldAccessor

logger = get_logger(__name__)

FORMS_HOST = "docs.google.com"
ENTRY_PREFIX = "entry."

_VIEW_SEGMENT = "viewform"
_SUBMIT_SEGMENT = "formResponse"


@dc.dataclass(frozen=True, slots=True)
class FieldMapping:
    """One form entry and the event field submitted for it.

    Attributes
    ----------
    entry_id
        Query parameter key assigned by the form (``entry.1234``).
    placeholder
        Placeholder name found in the prefilled link.
    accessor
        Function extracting the submitted value from a ``SyncEvent``.

    """

    entry_id: str
    placeholder: str
    accessor: FieldAccessor


@dc.dataclass(frozen=True, slots=True)
class ParsedFormsEndpoint:
    """Submission target derived from a prefilled form link.

    Attributes
    ----------
    base_submission_url
        ``formResponse`` URL without a query string.
    field_mappings
        Entries in link order; never empty.

    """

    base_submission_url: str
    field_mappings: tuple[FieldMapping, ...]

    def __post_init__(self) -> None:
        """Reject an endpoint that would submit nothing."""
        if not self.field_mappings:
            raise FormsUrlError.no_usable_field_mappings()


def is_forms_host(host: str) -> bool:
    """Return whether ``host`` is the forms domain or one of its subdomains."""
    normalized = host.strip().lower().rstrip(".")
    return normalized == FORMS_HOST or normalized.endswith(f".{FORMS_HOST}")


def _submission_url(url: httpx.URL) -> str:
    """Drop query and fragment and point the final segment at ``formResponse``."""
    segments = url.path.split("/")
    if segments[-1] == _VIEW_SEGMENT:
        segments[-1] = _SUBMIT_SEGMENT
    return str(url.copy_with(path="/".join(segments), query=None, fragment=None))


def _map_parameters(
    parameters: list[tuple[str, str]],
) -> list[FieldMapping]:
    mappings: list[FieldMapping] = []
    for key, placeholder in parameters:
        if not key.startswith(ENTRY_PREFIX):
            log_warning(
                logger, "Unsupported query parameter. Field %s will be skipped", key
            )
            continue

        accessor = lookup_placeholder(placeholder)
        if accessor is None:
            log_warning(
                logger,
                "Unknown placeholder: %s (field %s will be skipped)",
                placeholder,
                key,
            )
            continue

        log_info(logger, "Mapped %s -> %s", key, placeholder)
        mappings.append(
            FieldMapping(entry_id=key, placeholder=placeholder, accessor=accessor)
        )
    return mappings


def parse_forms_url(url: str) -> ParsedFormsEndpoint:
    """Parse a prefilled form link into a submission endpoint.

    Parameters
    ----------
    url
        Absolute prefilled link on the forms host.

    Returns
    -------
    ParsedFormsEndpoint
        Submission URL and the ordered entry mappings.

    Raises
    ------
    FormsUrlError
        If the link cannot be parsed, is not on the forms host, carries no
        query parameters, or names no known placeholder. ``reason`` tells
        the cases apart.

    Examples
    --------
    >>> endpoint = parse_forms_url(
    ...     "https://docs.google.com/forms/d/e/XYZ/viewform?entry.1=SYNC_TYPE"
    ... )
    >>> endpoint.base_submission_url
    'https://docs.google.com/forms/d/e/XYZ/formResponse'
    >>> [m.entry_id for m in endpoint.field_mappings]
    ['entry.1']

    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise FormsUrlError.malformed_url(url, str(exc)) from exc

    if not parsed.host:
        raise FormsUrlError.malformed_url(url, "missing host")
    if not is_forms_host(parsed.host):
        raise FormsUrlError.unsupported_host(parsed.host)

    parameters = parsed.params.multi_items()
    if not parameters:
        raise FormsUrlError.no_query_parameters(url)

    mappings = _map_parameters(parameters)
    if not mappings:
        raise FormsUrlError.no_usable_field_mappings()

    log_info(
        logger,
        "Successfully parsed Google Forms URL with %d field mappings",
        len(mappings),
    )
    return ParsedFormsEndpoint(
        base_submission_url=_submission_url(parsed),
        field_mappings=tuple(mappings),
    )
