"""Configuration for sync telemetry submission.

Settings come from environment variables read once when the recorder is
initialised. A changed endpoint only takes effect for a recorder created
afterwards.

Usage
-----
>>> import os
>>> os.environ["SYNC_TELEMETRY_ENDPOINT"] = "eventstream.example.com"
>>> config = TelemetryConfig.from_env()
>>> config.endpoint
'eventstream.example.com'

"""

from __future__ import annotations

import dataclasses as dc
import os

import httpx

from synctelemetry.errors import TelemetryConfigError

# Defaults mirror the timeouts and naming used by the IDE plugin
_DEFAULT_TIMEOUT_S = 30.0
_DEFAULT_MAX_WORKERS = 2
_DEFAULT_STREAM_BATCH_SIZE = 100
_DEFAULT_STREAM_MAX_RETRIES = 3
_DEFAULT_CATALOG_NAME = "telemetry_android"
_DEFAULT_APP_NAME = "sync-telemetry"

# Upper bound on events per event stream request
MAX_STREAM_BATCH_SIZE = 500


@dc.dataclass(frozen=True, slots=True)
class HttpTimeouts:
    """Per-request timeout budget shared by both backends.

    Attributes
    ----------
    connect_s
        Seconds allowed to establish a connection.
    read_s
        Seconds allowed between bytes of the response.
    write_s
        Seconds allowed between bytes of the request body.

    """

    connect_s: float = _DEFAULT_TIMEOUT_S
    read_s: float = _DEFAULT_TIMEOUT_S
    write_s: float = _DEFAULT_TIMEOUT_S

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``; every phase is bounded."""
        return httpx.Timeout(
            connect=self.connect_s,
            read=self.read_s,
            write=self.write_s,
            pool=self.connect_s,
        )


@dc.dataclass(frozen=True, slots=True)
class TelemetryConfig:
    """Settings for resolving and driving a telemetry submitter.

    Attributes
    ----------
    endpoint
        Raw endpoint string. Blank disables telemetry.
    timeouts
        HTTP timeouts used by both backends.
    max_workers
        Size of the thread pool that runs submissions.
    stream_max_batch_size
        Maximum events per event stream request.
    stream_max_retries
        Attempts per event stream batch before giving up.
    catalog_name
        Catalog that event stream events are filed under.
    app_name
        Application name attached to event stream events.
    log_level
        Raw log level for command-line use.

    """

    endpoint: str = ""
    timeouts: HttpTimeouts = dc.field(default_factory=HttpTimeouts)
    max_workers: int = _DEFAULT_MAX_WORKERS
    stream_max_batch_size: int = _DEFAULT_STREAM_BATCH_SIZE
    stream_max_retries: int = _DEFAULT_STREAM_MAX_RETRIES
    catalog_name: str = _DEFAULT_CATALOG_NAME
    app_name: str = _DEFAULT_APP_NAME
    log_level: str = "INFO"

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to ``default``."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            raise TelemetryConfigError.not_positive_int(env_var, raw) from exc
        if value < 1:
            raise TelemetryConfigError.not_positive_int(env_var, raw)
        return value

    @staticmethod
    def _parse_positive_float(env_var: str, default: float) -> float:
        """Read a positive float env var, falling back to ``default``."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError as exc:
            raise TelemetryConfigError.not_positive_float(env_var, raw) from exc
        # Rejects nan and inf as well as non-positive values
        if not 0 < value < float("inf"):
            raise TelemetryConfigError.not_positive_float(env_var, raw)
        return value

    @staticmethod
    def _parse_name(env_var: str, default: str) -> str:
        raw = os.environ.get(env_var)
        if raw is None:
            return default
        value = raw.strip()
        if not value:
            raise TelemetryConfigError.blank(env_var)
        return value

    @classmethod
    def from_env(cls) -> TelemetryConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``SYNC_TELEMETRY_ENDPOINT``: Endpoint string; blank disables telemetry
        - ``SYNC_TELEMETRY_CONNECT_TIMEOUT_S``: Connect timeout (positive float)
        - ``SYNC_TELEMETRY_READ_TIMEOUT_S``: Read and write timeout
          (positive float)
        - ``SYNC_TELEMETRY_WORKERS``: Submission pool size (positive integer)
        - ``SYNC_TELEMETRY_STREAM_BATCH_SIZE``: Event stream batch cap (1-500)
        - ``SYNC_TELEMETRY_STREAM_MAX_RETRIES``: Event stream attempts per
          batch (positive integer)
        - ``SYNC_TELEMETRY_CATALOG_NAME``: Event stream catalog name
        - ``SYNC_TELEMETRY_APP_NAME``: Event stream application name
        - ``SYNC_TELEMETRY_LOG_LEVEL``: Log level for the CLI

        Returns
        -------
        TelemetryConfig
            Configuration with values from the environment or defaults.

        Raises
        ------
        TelemetryConfigError
            If a variable is set to an invalid value.

        """
        connect_s = cls._parse_positive_float(
            "SYNC_TELEMETRY_CONNECT_TIMEOUT_S", _DEFAULT_TIMEOUT_S
        )
        read_s = cls._parse_positive_float(
            "SYNC_TELEMETRY_READ_TIMEOUT_S", _DEFAULT_TIMEOUT_S
        )

        batch_size = cls._parse_positive_int(
            "SYNC_TELEMETRY_STREAM_BATCH_SIZE", _DEFAULT_STREAM_BATCH_SIZE
        )
        if batch_size > MAX_STREAM_BATCH_SIZE:
            raise TelemetryConfigError.out_of_range(
                "SYNC_TELEMETRY_STREAM_BATCH_SIZE",
                str(batch_size),
                1,
                MAX_STREAM_BATCH_SIZE,
            )

        return cls(
            endpoint=os.environ.get("SYNC_TELEMETRY_ENDPOINT", "").strip(),
            timeouts=HttpTimeouts(connect_s=connect_s, read_s=read_s, write_s=read_s),
            max_workers=cls._parse_positive_int(
                "SYNC_TELEMETRY_WORKERS", _DEFAULT_MAX_WORKERS
            ),
            stream_max_batch_size=batch_size,
            stream_max_retries=cls._parse_positive_int(
                "SYNC_TELEMETRY_STREAM_MAX_RETRIES", _DEFAULT_STREAM_MAX_RETRIES
            ),
            catalog_name=cls._parse_name(
                "SYNC_TELEMETRY_CATALOG_NAME", _DEFAULT_CATALOG_NAME
            ),
            app_name=cls._parse_name("SYNC_TELEMETRY_APP_NAME", _DEFAULT_APP_NAME),
            log_level=os.environ.get("SYNC_TELEMETRY_LOG_LEVEL", "INFO"),
        )
