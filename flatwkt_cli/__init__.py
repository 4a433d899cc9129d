"""
flatwkt CLI - Command-line interface for the WKT codec.

Usage:
    flatwkt-cli normalize "POINT(1 2)"
    flatwkt-cli validate parcels.wkt
    flatwkt-cli inspect "LINESTRING (0 0, 1 1)"
    flatwkt-cli convert config/convert.yaml
"""

__version__ = "1.0.0"
