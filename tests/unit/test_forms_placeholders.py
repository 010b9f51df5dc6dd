"""Unit tests for the placeholder vocabulary used by prefilled form links."""

from __future__ import annotations

import typing as typ

import msgspec
import pytest

from synctelemetry.submitters.forms import (
    PLACEHOLDER_TABLE,
    known_placeholders,
    lookup_placeholder,
)

if typ.TYPE_CHECKING:
    from synctelemetry.events import SyncEvent

_EXPECTED_NAMES = (
    "SYNC_TYPE",
    "SYNC_TIME",
    "CONFIGURE_INCLUDED_BUILDS_DURATION",
    "CONFIGURE_ROOT_PROJECT_DURATION",
    "GRADLE_EXECUTION_DURATION",
    "GRADLE_DURATION",
    "IDE_DURATION",
    "JVM_TOTAL_MEMORY",
    "JVM_FREE_MEMORY",
    "AVAILABLE_PROCESSORS",
    "CPU_NAME",
    "NUMBER_OF_MODULES",
    "ACTIVE_WORKSPACE",
    "ERROR_MESSAGE",
    "STUDIO_VERSION",
    "TOOLKIT_VERSION",
    "AGP_VERSION",
    "GRADLE_VERSION",
    "INTELLIJ_CORE_VERSION",
    "USER_LDAP",
    "OS_SYSTEM_ARCHITECTURE",
    "ARTIFACT_SYNC_ENABLED",
    "ACTIVE_ROOT_PROJECT_NAME",
    "SA_TOOLBOX_CHANNEL",
    "SYNC_TRACE_ID",
)


class TestPlaceholderTable:
    """Tests for the placeholder table contents."""

    def test_known_placeholders_cover_every_event_field(self) -> None:
        """Every event field has exactly one placeholder, in field order."""
        assert known_placeholders() == _EXPECTED_NAMES, (
            "Placeholder vocabulary changed"
        )

    def test_table_is_read_only(self) -> None:
        """The table rejects runtime modification."""
        with pytest.raises(TypeError):
            PLACEHOLDER_TABLE["NEW"] = lambda _event: None  # type: ignore[index]

    @pytest.mark.parametrize("name", ["sync_type", "Sync_Type", "SYNC TYPE", ""])
    def test_lookup_is_exact(self, name: str) -> None:
        """Lookups are case-sensitive and do not trim or normalize."""
        assert lookup_placeholder(name) is None, f"{name!r} should not resolve"


class TestAccessors:
    """Tests for rendering event fields as form values."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("SYNC_TYPE", "succeeded"),
            ("SYNC_TIME", "12000"),
            ("GRADLE_DURATION", "9000"),
            ("AVAILABLE_PROCESSORS", "10"),
            ("NUMBER_OF_MODULES", "42"),
            ("CPU_NAME", "Apple M1 Pro"),
            ("TOOLKIT_VERSION", "xyz.block.idea.telemetry-0.4.2"),
            ("AGP_VERSION", "8.4.0"),
            ("SYNC_TRACE_ID", "trace-123"),
        ],
    )
    def test_renders_populated_fields(
        self, sync_event: SyncEvent, name: str, expected: str
    ) -> None:
        """Numbers render in decimal and text passes through unchanged."""
        accessor = lookup_placeholder(name)
        assert accessor is not None, f"{name} should be registered"
        assert accessor(sync_event) == expected

    @pytest.mark.parametrize(
        "name",
        ["ACTIVE_WORKSPACE", "ERROR_MESSAGE", "SA_TOOLBOX_CHANNEL"],
    )
    def test_absent_values_are_none(self, sync_event: SyncEvent, name: str) -> None:
        """Absent nullable fields yield None rather than a sentinel string."""
        accessor = lookup_placeholder(name)
        assert accessor is not None
        assert accessor(sync_event) is None, f"{name} should be absent"

    def test_negative_durations_render_as_minus_one(
        self, failed_event: SyncEvent
    ) -> None:
        """Unmeasured timings of a failed sync render as -1."""
        accessor = lookup_placeholder("IDE_DURATION")
        assert accessor is not None
        assert accessor(failed_event) == "-1"

    def test_flag_renders_lowercase(self, sync_event: SyncEvent) -> None:
        """Booleans render as lowercase true/false."""
        accessor = lookup_placeholder("ARTIFACT_SYNC_ENABLED")
        assert accessor is not None
        assert accessor(sync_event) == "false"
        enabled = msgspec.structs.replace(sync_event, artifact_sync_enabled=True)
        assert accessor(enabled) == "true"
