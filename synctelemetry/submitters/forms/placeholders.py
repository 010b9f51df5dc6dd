"""Placeholder vocabulary for prefilled form links.

A prefilled form link marks each form entry with one of the placeholder
names below (``entry.123=SYNC_TIME``). The name selects the ``SyncEvent``
field whose value is submitted for that entry. The vocabulary is the schema
contract with every form configured against it: names may be added but an
existing name must keep its meaning.
"""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ

if typ.TYPE_CHECKING:
    from synctelemetry.events.models import SyncEvent

type FieldAccessor = cabc.Callable[[SyncEvent], str | None]


def _text(field: str) -> FieldAccessor:
    """Return an accessor for a string field, passing ``None`` through."""

    def accessor(event: SyncEvent) -> str | None:
        return getattr(event, field)

    return accessor


def _number(field: str) -> FieldAccessor:
    """Return an accessor rendering an integer field in decimal."""

    def accessor(event: SyncEvent) -> str | None:
        return str(getattr(event, field))

    return accessor


def _flag(field: str) -> FieldAccessor:
    """Return an accessor rendering a boolean field as ``true``/``false``."""

    def accessor(event: SyncEvent) -> str | None:
        return "true" if getattr(event, field) else "false"

    return accessor


PLACEHOLDER_TABLE: cabc.Mapping[str, FieldAccessor] = types.MappingProxyType(
    {
        "SYNC_TYPE": _text("sync_type"),
        "SYNC_TIME": _number("sync_time"),
        "CONFIGURE_INCLUDED_BUILDS_DURATION": _number(
            "configure_included_builds_duration"
        ),
        "CONFIGURE_ROOT_PROJECT_DURATION": _number("configure_root_project_duration"),
        "GRADLE_EXECUTION_DURATION": _number("gradle_execution_duration"),
        "GRADLE_DURATION": _number("gradle_duration"),
        "IDE_DURATION": _number("ide_duration"),
        "JVM_TOTAL_MEMORY": _text("jvm_total_memory"),
        "JVM_FREE_MEMORY": _text("jvm_free_memory"),
        "AVAILABLE_PROCESSORS": _number("available_processors"),
        "CPU_NAME": _text("cpu_name"),
        "NUMBER_OF_MODULES": _number("number_of_modules"),
        "ACTIVE_WORKSPACE": _text("active_workspace"),
        "ERROR_MESSAGE": _text("error_message"),
        "STUDIO_VERSION": _text("studio_version"),
        "TOOLKIT_VERSION": _text("toolkit_version"),
        "AGP_VERSION": _text("agp_version"),
        "GRADLE_VERSION": _text("gradle_version"),
        "INTELLIJ_CORE_VERSION": _text("intellij_core_version"),
        "USER_LDAP": _text("user_ldap"),
        "OS_SYSTEM_ARCHITECTURE": _text("os_system_architecture"),
        "ARTIFACT_SYNC_ENABLED": _flag("artifact_sync_enabled"),
        "ACTIVE_ROOT_PROJECT_NAME": _text("active_root_project_name"),
        "SA_TOOLBOX_CHANNEL": _text("sa_toolbox_channel"),
        "SYNC_TRACE_ID": _text("sync_trace_id"),
    }
)


def lookup_placeholder(name: str) -> FieldAccessor | None:
    """Return the accessor registered for ``name``, or ``None`` if unknown.

    Lookup is exact: placeholder names are case-sensitive.
    """
    return PLACEHOLDER_TABLE.get(name)


def known_placeholders() -> tuple[str, ...]:
    """Return every placeholder name in registration order."""
    return tuple(PLACEHOLDER_TABLE)
