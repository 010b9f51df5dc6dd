"""Command-line helper for checking a telemetry endpoint and sending a test event."""

from __future__ import annotations

import argparse
import getpass
import os
import platform
import typing as typ

from synctelemetry.config import TelemetryConfig
from synctelemetry.errors import TelemetryConfigError
from synctelemetry.events import (
    HostSnapshot,
    SyncFailed,
    SyncSucceeded,
    build_sync_event,
)
from synctelemetry.logging import configure_logging
from synctelemetry.submitters import (
    FormsSubmitter,
    StreamSubmitter,
    describe_submitter,
    resolve_submitter,
)

if typ.TYPE_CHECKING:
    from synctelemetry.events import SyncResult
    from synctelemetry.submitters import Submitter

EXIT_OK = 0
EXIT_SUBMISSION_FAILED = 1
EXIT_DISABLED = 2

_SAMPLE_PLUGIN_ID = "xyz.block.idea.telemetry"
_SAMPLE_PLUGIN_VERSION = "cli"


def _sample_host() -> HostSnapshot:
    """Describe the machine running the CLI as if it were the IDE host."""
    return HostSnapshot(
        jvm_total_memory="0",
        jvm_free_memory="0",
        available_processors=os.cpu_count() or 1,
        cpu_name=platform.processor() or "Unknown",
        studio_version="cli",
        intellij_core_version="cli",
        plugin_id=_SAMPLE_PLUGIN_ID,
        plugin_version=_SAMPLE_PLUGIN_VERSION,
        user_ldap=getpass.getuser(),
        os_system_architecture=platform.machine(),
        active_root_project_name="synctelemetry-cli",
    )


def _sample_result(sync_type: str) -> SyncResult:
    if sync_type == "failed":
        return SyncFailed(total_duration=1500, error_message="Sample sync failure")
    return SyncSucceeded(
        total_duration=1500,
        configure_included_builds_duration=100,
        configure_root_project_duration=200,
        gradle_execution_duration=700,
        gradle_duration=1000,
        ide_duration=500,
        project_count=1,
    )


def _print_check(submitter: Submitter) -> None:
    print(f"backend: {describe_submitter(submitter)}")
    match submitter:
        case FormsSubmitter():
            print(f"submission url: {submitter.endpoint.base_submission_url}")
            for mapping in submitter.endpoint.field_mappings:
                print(f"  {mapping.entry_id} -> {mapping.placeholder}")
        case StreamSubmitter():
            print(f"endpoint: {submitter.client.config.endpoint}")


def main(argv: list[str] | None = None) -> int:
    """Resolve a telemetry endpoint and optionally submit one sample event.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the submission failed, 2 when
        telemetry is disabled or the endpoint or environment was rejected.

    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "endpoint",
        nargs="?",
        default=None,
        help="Endpoint to use; defaults to SYNC_TELEMETRY_ENDPOINT",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only resolve the endpoint and print the selected backend",
    )
    parser.add_argument(
        "--sync-type",
        choices=("succeeded", "failed"),
        default="succeeded",
        help="Outcome of the sample sync event",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level; defaults to SYNC_TELEMETRY_LOG_LEVEL",
    )
    args = parser.parse_args(argv)

    try:
        config = TelemetryConfig.from_env()
    except TelemetryConfigError as exc:
        print(f"Invalid telemetry configuration: {exc}")
        return EXIT_DISABLED

    configure_logging(args.log_level or config.log_level)

    endpoint = args.endpoint if args.endpoint is not None else config.endpoint
    submitter = resolve_submitter(endpoint, config=config)
    if submitter is None:
        print("Telemetry is disabled: no usable endpoint configured")
        return EXIT_DISABLED

    try:
        if args.check:
            _print_check(submitter)
            return EXIT_OK

        event = build_sync_event(_sample_result(args.sync_type), _sample_host())
        if not submitter.submit(event):
            print(f"Submitting the sample {args.sync_type} event failed")
            return EXIT_SUBMISSION_FAILED
    finally:
        submitter.close()

    print(f"Submitted the sample {args.sync_type} event")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
