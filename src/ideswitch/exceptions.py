"""IDE Switcher exception hierarchy.

All public exceptions inherit from IdeSwitchError, giving callers a single
base class to catch when they want to handle any ideswitch-specific failure
without swallowing unrelated errors.

Operations that talk to the operating system (registry reads and writes,
spawning an IDE executable) do not raise these for runtime failures; they
return structured result objects instead. Exceptions are reserved for
invalid input supplied by the caller.
"""


class IdeSwitchError(Exception):
    """Base exception for all ideswitch errors."""


class ConfigError(IdeSwitchError):
    """Raised when a settings value is invalid or cannot be persisted.

    Covers unknown target protocols passed to ``Settings.set_target`` and
    failures writing the settings file.
    """


class RegistrationError(IdeSwitchError):
    """Raised when a protocol registration request is malformed.

    Covers unknown protocol identifiers. Registry write failures are
    reported through ``RegistrationResult`` rather than raised.
    """
