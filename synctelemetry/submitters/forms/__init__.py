"""Google Forms backend: placeholder vocabulary, link parser, submitter."""

from __future__ import annotations

from synctelemetry.submitters.forms.parser import (
    ENTRY_PREFIX,
    FORMS_HOST,
    FieldMapping,
    ParsedFormsEndpoint,
    is_forms_host,
    parse_forms_url,
)
from synctelemetry.submitters.forms.placeholders import (
    PLACEHOLDER_TABLE,
    FieldAccessor,
    known_placeholders,
    lookup_placeholder,
)
from synctelemetry.submitters.forms.submitter import FormsSubmitter

__all__ = [
    "ENTRY_PREFIX",
    "FORMS_HOST",
    "PLACEHOLDER_TABLE",
    "FieldAccessor",
    "FieldMapping",
    "FormsSubmitter",
    "ParsedFormsEndpoint",
    "is_forms_host",
    "known_placeholders",
    "lookup_placeholder",
    "parse_forms_url",
]
