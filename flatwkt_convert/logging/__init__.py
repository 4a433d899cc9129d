"""
Structured Logging for flatwkt
==============================

Bounded Context: Observability

JSON-structured logging for the conversion service and CLI. The codec
packages themselves never log; failures reach callers as exceptions.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
