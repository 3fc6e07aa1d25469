"""Recoverable error types.  Neither ever escapes the session."""


class MalformedRecord(ValueError):
    """Row with unparseable or out-of-range latitude / longitude."""


class InvalidConfiguration(ValueError):
    """Reveal budget input that is not a positive integer."""
