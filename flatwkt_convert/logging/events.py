"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the conversion service's structured logs.

Event Naming Convention:
    <component>.<action>         e.g. wkt.decoded
    error.<stage>                e.g. error.decode
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - wkt.*: Per-record codec steps
    - conversion.*: Batch lifecycle
    - error.*: Error conditions
    """

    # ========== WKT Events ==========
    WKT_DECODED = "wkt.decoded"
    """Record decoded into a geometry."""

    WKT_ENCODED = "wkt.encoded"
    """Geometry encoded back to WKT."""

    # ========== Conversion Events ==========
    CONVERSION_STARTED = "conversion.started"
    """Batch conversion started."""

    CONVERSION_COMPLETED = "conversion.completed"
    """Batch conversion finished (stats in metadata)."""

    # ========== Error Events ==========
    DECODE_ERROR = "error.decode"
    """Record could not be decoded."""

    CONFIG_ERROR = "error.config"
    """Configuration could not be loaded."""

