"""Sync event structures shared by every telemetry backend."""

from __future__ import annotations

import msgspec


class SyncEvent(msgspec.Struct, kw_only=True, frozen=True):
    """One build-sync occurrence, as submitted to a telemetry backend.

    Durations are milliseconds. A duration of ``-1`` means the value was not
    measured, which is the case for every timing of a failed sync.

    Attributes
    ----------
    sync_type
        Outcome name of the sync (``succeeded`` or ``failed``).
    sync_time
        Total wall-clock duration of the sync.
    configure_included_builds_duration
        Time spent configuring included builds.
    configure_root_project_duration
        Time spent configuring the root project.
    gradle_execution_duration
        Time spent executing Gradle tasks.
    gradle_duration
        Total time spent inside Gradle.
    ide_duration
        Time spent in the IDE after Gradle returned.
    jvm_total_memory
        Total JVM memory at the time of the sync, as reported by the host.
    jvm_free_memory
        Free JVM memory at the time of the sync, as reported by the host.
    available_processors
        Processor count visible to the IDE.
    cpu_name
        CPU brand string.
    number_of_modules
        Number of Gradle projects imported.
    active_workspace
        Workspace name, when the IDE exposes one.
    error_message
        Failure message for failed syncs.
    studio_version
        Android Studio plugin version.
    toolkit_version
        ``<plugin id>-<plugin version>`` of the telemetry plugin.
    agp_version
        Android Gradle Plugin version, when known.
    gradle_version
        Gradle version used for the sync, when known.
    intellij_core_version
        IntelliJ platform version.
    user_ldap
        Login name of the user who ran the sync.
    os_system_architecture
        Operating system architecture (``aarch64``, ``x86_64``...).
    artifact_sync_enabled
        Whether artifact sync was enabled for the sync.
    active_root_project_name
        Name of the IDE project.
    sa_toolbox_channel
        Toolbox release channel, when known.
    sync_trace_id
        Build trace identifier, when the build produced one.

    """

    sync_type: str
    sync_time: int
    configure_included_builds_duration: int
    configure_root_project_duration: int
    gradle_execution_duration: int
    gradle_duration: int
    ide_duration: int
    jvm_total_memory: str
    jvm_free_memory: str
    available_processors: int
    cpu_name: str
    number_of_modules: int
    active_workspace: str | None = None
    error_message: str | None = None
    studio_version: str
    toolkit_version: str
    agp_version: str | None = None
    gradle_version: str | None = None
    intellij_core_version: str
    user_ldap: str
    os_system_architecture: str
    artifact_sync_enabled: bool = False
    active_root_project_name: str
    sa_toolbox_channel: str | None = None
    sync_trace_id: str | None = None


class SyncSucceeded(msgspec.Struct, kw_only=True, frozen=True, tag="succeeded"):
    """Timing breakdown of a sync that completed successfully."""

    total_duration: int
    configure_included_builds_duration: int
    configure_root_project_duration: int
    gradle_execution_duration: int
    gradle_duration: int
    ide_duration: int
    project_count: int
    gradle_version: str | None = None
    build_trace_id: str | None = None

    @property
    def result_name(self) -> str:
        """Return the outcome name recorded as ``sync_type``."""
        return "succeeded"


class SyncFailed(msgspec.Struct, kw_only=True, frozen=True, tag="failed"):
    """A sync that ended with an error."""

    total_duration: int
    error_message: str | None = None
    gradle_version: str | None = None
    build_trace_id: str | None = None

    @property
    def result_name(self) -> str:
        """Return the outcome name recorded as ``sync_type``."""
        return "failed"


type SyncResult = SyncSucceeded | SyncFailed


class HostSnapshot(msgspec.Struct, kw_only=True, frozen=True):
    """Host and IDE facts gathered by the caller at sync time.

    Attributes
    ----------
    jvm_total_memory
        Total JVM memory, pre-rendered by the host.
    jvm_free_memory
        Free JVM memory, pre-rendered by the host.
    available_processors
        Processor count visible to the IDE.
    cpu_name
        CPU brand string; ``Unknown`` when it could not be read.
    studio_version
        Android Studio plugin version.
    intellij_core_version
        IntelliJ platform version.
    plugin_id
        Identifier of the telemetry plugin, used to prefix its version.
    plugin_version
        Version of the telemetry plugin.
    user_ldap
        Login name of the current user.
    os_system_architecture
        Operating system architecture.
    active_root_project_name
        Name of the IDE project.

    """

    jvm_total_memory: str
    jvm_free_memory: str
    available_processors: int
    cpu_name: str = "Unknown"
    studio_version: str
    intellij_core_version: str
    plugin_id: str
    plugin_version: str
    user_ldap: str
    os_system_architecture: str
    active_root_project_name: str
