"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from synctelemetry.events import (
    HostSnapshot,
    SyncEvent,
    SyncFailed,
    SyncSucceeded,
    build_sync_event,
)


@pytest.fixture
def host() -> HostSnapshot:
    """Return host facts for a typical developer machine."""
    return HostSnapshot(
        jvm_total_memory="2147483648",
        jvm_free_memory="536870912",
        available_processors=10,
        cpu_name="Apple M1 Pro",
        studio_version="2024.1.1",
        intellij_core_version="241.15989.150",
        plugin_id="xyz.block.idea.telemetry",
        plugin_version="0.4.2",
        user_ldap="jdoe",
        os_system_architecture="aarch64",
        active_root_project_name="reef",
    )


@pytest.fixture
def succeeded_result() -> SyncSucceeded:
    """Return a successful sync with a full timing breakdown."""
    return SyncSucceeded(
        total_duration=12000,
        configure_included_builds_duration=800,
        configure_root_project_duration=1200,
        gradle_execution_duration=6000,
        gradle_duration=9000,
        ide_duration=3000,
        project_count=42,
        gradle_version="8.7",
        build_trace_id="trace-123",
    )


@pytest.fixture
def failed_result() -> SyncFailed:
    """Return a failed sync carrying an error message."""
    return SyncFailed(
        total_duration=4500,
        error_message="Could not resolve com.example:lib:1.0",
        gradle_version="8.7",
    )


@pytest.fixture
def sync_event(succeeded_result: SyncSucceeded, host: HostSnapshot) -> SyncEvent:
    """Return the event built for a successful sync."""
    return build_sync_event(succeeded_result, host, agp_version="8.4.0")


@pytest.fixture
def failed_event(failed_result: SyncFailed, host: HostSnapshot) -> SyncEvent:
    """Return the event built for a failed sync."""
    return build_sync_event(failed_result, host)
