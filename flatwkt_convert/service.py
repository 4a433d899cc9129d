"""
WKT Converter Service - batch normalization of WKT records.

Reads one WKT record per line, decodes it, re-encodes it at the configured
precision and writes the canonical text out. Blank lines and comment lines
are skipped.

Error handling:
- on_error == "skip": the failing record is logged and left out
- on_error == "fail": the first failure is logged and re-raised
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from flatwkt_geom import GeometryError
from flatwkt_wkt import marshal_with_max_decimal_digits, unmarshal

from flatwkt_convert.config import ConverterConfig
from flatwkt_convert.logging import LogEvent, StructuredLogger, create_logger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionStats:
    """
    Immutable summary of one batch.

    Attributes:
        total: Records attempted (blank and comment lines excluded)
        converted: Records written out
        failed: Records that could not be decoded
        skipped: Blank and comment lines
        errors: Line number -> error message for each failed record
    """
    total: int = 0
    converted: int = 0
    failed: int = 0
    skipped: int = 0
    errors: Dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'total': self.total,
            'converted': self.converted,
            'failed': self.failed,
            'skipped': self.skipped,
            'errors': {str(line): message for line, message in self.errors.items()},
        }


class WKTConverterService:
    """
    Batch WKT normalizer.

    Usage:
        config = ConverterConfig.from_yaml("convert.yaml")
        service = WKTConverterService(config)
        stats = service.run()
    """

    def __init__(self, config: ConverterConfig, structured_logger: Optional[StructuredLogger] = None):
        """
        Initialize converter service.

        Args:
            config: Converter configuration
            structured_logger: Logger for record events (default: "converter" component)
        """
        self.config = config
        self.structured_logger = structured_logger or create_logger("converter", level=config.level)

    def convert_line(self, text: str, line_number: int = 1) -> str:
        """
        Normalize a single WKT record.

        Args:
            text: WKT record
            line_number: Position of the record in its batch, for log metadata

        Raises:
            GeometryError: If the record is not valid WKT
        """
        geometry = unmarshal(text.strip())
        self.structured_logger.debug(
            event=LogEvent.WKT_DECODED,
            message="Decoded record",
            metadata={
                'line': line_number,
                'type': geometry.geometry_type.value,
                'layout': geometry.layout.value,
            },
        )
        encoded = marshal_with_max_decimal_digits(geometry, self.config.max_decimal_digits)
        self.structured_logger.debug(
            event=LogEvent.WKT_ENCODED,
            message="Encoded record",
            metadata={'line': line_number, 'length': len(encoded)},
        )
        return encoded

    def convert_lines(self, lines: Iterable[str]) -> Tuple[List[str], ConversionStats]:
        """
        Normalize every record in `lines`.

        Returns:
            (converted records in input order, batch statistics)

        Raises:
            GeometryError: On the first bad record when on_error == "fail"
        """
        outputs: List[str] = []
        errors: Dict[int, str] = {}
        total = skipped = 0
        prefix = self.config.comment_prefix

        for line_number, line in enumerate(lines, start=1):
            text = line.strip()
            if not text or (prefix and text.startswith(prefix)):
                skipped += 1
                continue

            total += 1
            try:
                outputs.append(self.convert_line(text, line_number))
            except GeometryError as e:
                errors[line_number] = str(e)
                self.structured_logger.error(
                    event=LogEvent.DECODE_ERROR,
                    message="Failed to decode record",
                    metadata={'line': line_number},
                    exc_info=e,
                )
                if self.config.on_error == "fail":
                    raise

        stats = ConversionStats(
            total=total,
            converted=len(outputs),
            failed=len(errors),
            skipped=skipped,
            errors=errors,
        )
        return outputs, stats

    def run(self) -> ConversionStats:
        """
        Convert `input_path` into `output_path`.

        The output file is only written when the whole batch completes.
        """
        self.structured_logger.info(
            event=LogEvent.CONVERSION_STARTED,
            message="Conversion started",
            metadata=self.config.to_dict(),
        )
        logger.info(f"Reading {self.config.input_path}")

        with open(self.config.input_path, encoding="utf-8") as f:
            outputs, stats = self.convert_lines(f)

        self.config.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config.output_path, "w", encoding="utf-8") as f:
            for record in outputs:
                f.write(record)
                f.write("\n")
        logger.info(f"Wrote {stats.converted} records to {self.config.output_path}")

        self.structured_logger.info(
            event=LogEvent.CONVERSION_COMPLETED,
            message=f"Converted {stats.converted} of {stats.total} records",
            metadata=stats.to_dict(),
        )
        return stats
