"""Assemble a ``SyncEvent`` from a sync result and host facts."""

from __future__ import annotations

import typing as typ

from synctelemetry.events.models import SyncEvent, SyncFailed, SyncSucceeded

if typ.TYPE_CHECKING:
    from synctelemetry.events.models import HostSnapshot, SyncResult

# Timings that were never measured are reported as -1 rather than omitted.
UNMEASURED = -1


def build_sync_event(
    result: SyncResult,
    host: HostSnapshot,
    *,
    active_workspace: str | None = None,
    agp_version: str | None = None,
    sa_toolbox_channel: str | None = None,
    artifact_sync_enabled: bool = False,
) -> SyncEvent:
    """Build the event submitted for one finished sync.

    Parameters
    ----------
    result
        Outcome of the sync. Successful syncs contribute their timing
        breakdown and module count; failed syncs contribute their error
        message and report every timing as ``-1``.
    host
        Host and IDE facts captured by the caller.
    active_workspace
        Optional workspace name.
    agp_version
        Optional Android Gradle Plugin version.
    sa_toolbox_channel
        Optional toolbox release channel.
    artifact_sync_enabled
        Whether artifact sync was enabled.

    Returns
    -------
    SyncEvent
        Immutable event ready for submission.

    Examples
    --------
    >>> event = build_sync_event(SyncFailed(total_duration=12), host)
    >>> event.gradle_duration
    -1

    """
    match result:
        case SyncSucceeded():
            timings = (
                result.configure_included_builds_duration,
                result.configure_root_project_duration,
                result.gradle_execution_duration,
                result.gradle_duration,
                result.ide_duration,
            )
            module_count = result.project_count
            error_message = None
        case SyncFailed():
            timings = (UNMEASURED,) * 5
            module_count = UNMEASURED
            error_message = result.error_message

    (
        configure_included_builds,
        configure_root_project,
        gradle_execution,
        gradle,
        ide,
    ) = timings

    return SyncEvent(
        sync_type=result.result_name,
        sync_time=result.total_duration,
        configure_included_builds_duration=configure_included_builds,
        configure_root_project_duration=configure_root_project,
        gradle_execution_duration=gradle_execution,
        gradle_duration=gradle,
        ide_duration=ide,
        jvm_total_memory=host.jvm_total_memory,
        jvm_free_memory=host.jvm_free_memory,
        available_processors=host.available_processors,
        cpu_name=host.cpu_name,
        number_of_modules=module_count,
        active_workspace=active_workspace,
        error_message=error_message,
        studio_version=host.studio_version,
        # Prefixed with the plugin id to tell it apart from other toolkits.
        toolkit_version=f"{host.plugin_id}-{host.plugin_version}",
        agp_version=agp_version,
        gradle_version=result.gradle_version,
        intellij_core_version=host.intellij_core_version,
        user_ldap=host.user_ldap,
        os_system_architecture=host.os_system_architecture,
        artifact_sync_enabled=artifact_sync_enabled,
        active_root_project_name=host.active_root_project_name,
        sa_toolbox_channel=sa_toolbox_channel,
        sync_trace_id=result.build_trace_id,
    )
