"""
Notes API - Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for request handling and startup.
How:   Each exception carries a message and an optional context dict.
       Request-time errors are translated to JSON responses by the global
       handlers in factory.py. Bootstrap errors are never caught: they
       propagate out of the startup procedure and end the process.

Exception Hierarchy:
    NotesApiError (base)
    ├── ValidationError              → 400 Bad Request
    ├── NotFoundError                → 404 Not Found
    ├── DatabaseError                → 500 Internal Server Error
    └── BootstrapError               → fatal, startup aborted
        ├── ApplicationCreationError → root module could not be assembled
        ├── ListenError              → port in use or invalid
        └── DocumentationError       → docs scoped to an unknown module
"""

from typing import Any, Dict, Optional


class NotesApiError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesApiError):
    """
    Raised when client input fails a business rule.

    Schema-level problems are rejected by FastAPI with 422 before reaching
    the services; this one covers rules the schemas cannot express, such as
    an update request that changes nothing.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesApiError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that into this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotesApiError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. SQL, constraint
    names and driver errors stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# ══════════════════════════════════════════════════════════════════════════
# Startup errors
# ══════════════════════════════════════════════════════════════════════════


class BootstrapError(NotesApiError):
    """Base for failures of the one-time startup procedure. Always fatal."""

    def __init__(
        self,
        message: str = "Application bootstrap failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ApplicationCreationError(BootstrapError):
    """The root module could not be turned into an application instance."""

    def __init__(
        self,
        message: str = "Could not create the application from the root module",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ListenError(BootstrapError):
    """
    The network listener could not be opened.

    When: port already bound, port/host invalid, or the server stopped
    before it reported itself started (e.g. lifespan startup failed).
    """

    def __init__(
        self,
        host: str,
        port: int,
        reason: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Could not listen on {host}:{port}"
        if reason:
            message = f"{message}: {reason}"
        ctx = context or {}
        ctx.update({"host": host, "port": port})
        super().__init__(message=message, context=ctx)
        self.host = host
        self.port = port


class DocumentationError(BootstrapError):
    """Documentation was scoped to a module the application does not import."""

    def __init__(
        self,
        module_name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["module"] = module_name
        super().__init__(
            message=f"Module '{module_name}' is not imported by the application",
            context=ctx,
        )
        self.module_name = module_name
