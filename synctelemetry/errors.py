"""Configuration errors raised while reading telemetry settings."""

from __future__ import annotations


class TelemetryConfigError(ValueError):
    """Raised when a telemetry environment variable holds an invalid value.

    A missing endpoint is not an error: it disables telemetry. This error
    only covers values that are present but unusable.
    """

    @classmethod
    def invalid_parameter(
        cls, env_var: str, value: str, constraint: str
    ) -> TelemetryConfigError:
        """Create error for an environment value that fails validation.

        Parameters
        ----------
        env_var
            Name of the offending environment variable.
        value
            The raw value that was read.
        constraint
            Description of the accepted values.

        Returns
        -------
        TelemetryConfigError
            Error naming the variable and the constraint.

        """
        return cls(f"Invalid {env_var} {value!r}. {constraint}")

    @classmethod
    def not_positive_int(cls, env_var: str, value: str) -> TelemetryConfigError:
        """Create error for a value that must be a positive integer."""
        return cls.invalid_parameter(env_var, value, "Must be a positive integer")

    @classmethod
    def not_positive_float(cls, env_var: str, value: str) -> TelemetryConfigError:
        """Create error for a value that must be a positive number."""
        return cls.invalid_parameter(env_var, value, "Must be a positive number")

    @classmethod
    def out_of_range(
        cls, env_var: str, value: str, minimum: int, maximum: int
    ) -> TelemetryConfigError:
        """Create error for an integer outside its accepted bounds."""
        return cls.invalid_parameter(
            env_var, value, f"Must be between {minimum} and {maximum}"
        )

    @classmethod
    def blank(cls, env_var: str) -> TelemetryConfigError:
        """Create error for a value that must not be blank."""
        return cls(f"{env_var} must be non-empty when set")
