"""
Greeter Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the few ways this service can fail.
How:   Each exception class carries a message and optional context dict.
       Startup errors are turned into process exit codes by server.py;
       anything raised while serving a request is caught by the global
       handlers registered in main.py.

Exception Hierarchy:
    GreeterError (base)                    → 500 Internal Server Error
    ├── ConfigurationError                 → exit code 78 (EX_CONFIG)
    └── ServerStartupError                 → exit code 69 (EX_UNAVAILABLE)

Unmatched routes are not application errors: the framework answers them
with its default 404 / 405 responses.
"""

from typing import Any, Dict, Optional


class GreeterError(Exception):
    """
    Base exception for all Greeter application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged but NOT returned to clients)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(GreeterError):
    """
    Raised when settings fail validation.

    When:    Out-of-range port, unknown log level, malformed env var.
    Effect:  Fatal at startup; the process exits with EX_CONFIG.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ServerStartupError(GreeterError):
    """
    Raised when the listening socket cannot be bound.

    When:    Port already in use, permission denied, unknown host address.
    Effect:  Fatal at startup; the process exits with EX_UNAVAILABLE.

    The OS error (errno and strerror) is kept in `context` and in the message
    so the diagnostic printed at exit names the actual cause.
    """

    def __init__(
        self,
        host: str,
        port: int,
        reason: Optional[OSError] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        detail = reason.strerror if reason is not None and reason.strerror else str(reason or "")
        message = f"Could not bind to {host}:{port}"
        if detail:
            message = f"{message}: {detail}"
        ctx = context or {}
        ctx["host"] = host
        ctx["port"] = port
        if reason is not None:
            ctx["errno"] = reason.errno
        super().__init__(message=message, context=ctx)
        self.host = host
        self.port = port
        self.reason = reason
