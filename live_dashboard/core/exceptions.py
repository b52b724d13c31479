"""
Exception hierarchy for the live dashboard engine.

All engine exceptions inherit from DashboardError and carry a user-facing
message. Transport errors are recoverable and end up as state flags,
command errors are returned to the caller, payload errors are logged and
dropped.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class DashboardError(Exception):
    """Base exception for all dashboard engine errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Transport
# -----------------------------------------------------------------------------


class TransportError(DashboardError):
    """Base exception for live channel and gateway transport failures."""

    def __init__(self, message: str, retryable: bool = True, **kwargs):
        super().__init__(message, **kwargs)
        self.retryable = retryable


class ChannelConnectError(TransportError):
    """Raised when the live channel cannot be opened."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Failed to connect to live data stream",
            retryable=True,
            **kwargs,
        )


class ChannelClosedError(TransportError):
    """Raised when the live channel is closed while sending or receiving."""

    def __init__(self, message: str, clean: bool = False, **kwargs):
        super().__init__(
            message,
            user_message="Live data stream disconnected",
            retryable=not clean,
            **kwargs,
        )
        self.clean = clean


class GatewayError(TransportError):
    """Raised when a Remote Data Gateway request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        kwargs.setdefault("user_message", "Dashboard service unavailable. Please try again.")
        super().__init__(message, retryable=status_code is None or status_code >= 500, **kwargs)
        self.status_code = status_code


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


class CommandError(DashboardError):
    """Raised when the server rejects an operator command."""

    def __init__(self, message: str, command: Optional[str] = None, **kwargs):
        kwargs.setdefault("user_message", "The operation could not be completed.")
        super().__init__(message, **kwargs)
        self.command = command


class CommandTimeoutError(CommandError):
    """Raised when an operator command does not complete in time."""

    def __init__(self, command: str, timeout_s: float):
        super().__init__(
            f"Command {command} timed out after {timeout_s:.1f}s",
            command=command,
            user_message="The operation timed out. Please try again.",
            details={"timeout_s": timeout_s},
        )
        self.timeout_s = timeout_s


# -----------------------------------------------------------------------------
# Payloads
# -----------------------------------------------------------------------------


class PayloadError(DashboardError):
    """Raised when a pushed or fetched payload cannot be normalized."""

    def __init__(self, message: str, kind: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.kind = kind


# -----------------------------------------------------------------------------
# State store
# -----------------------------------------------------------------------------


class StoreError(DashboardError):
    """Base exception for state store misuse."""
    pass


class ReentrantDispatchError(StoreError):
    """Raised when an action is dispatched while another dispatch is running."""

    def __init__(self, action_name: str):
        super().__init__(
            f"Cannot dispatch {action_name} while another action is being applied",
            details={"action": action_name},
        )


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at the UI boundary so internal details are never exposed.
    """
    if isinstance(exc, DashboardError) and getattr(exc, "user_message", None):
        return exc.user_message
    return "Something went wrong. Please try again."
