"""Per-operation context objects."""

from ebics_client.application.context.session_context import SessionContext

__all__ = ["SessionContext"]
