"""Trace artifacts."""

from ebics_client.infrastructure.trace.file_trace_manager import FileTraceManager

__all__ = ["FileTraceManager"]
