"""
flatwkt_convert - Batch WKT normalization service

Reads WKT records line by line, round-trips them through the flatwkt codec
and writes canonical WKT at a configured precision.

Architecture:
- ConverterConfig: YAML-backed, validated configuration
- WKTConverterService: Orchestrates read / decode / encode / write
- ConversionStats: Immutable batch summary
- logging/: Structured JSON logging for the service
"""

from flatwkt_convert.config import ConverterConfig
from flatwkt_convert.service import ConversionStats, WKTConverterService

__all__ = [
    "ConverterConfig",
    "ConversionStats",
    "WKTConverterService",
]
