class ConversionError(Exception):
    """Base exception for conversion failures."""


class SchemaViolation(ConversionError):
    """Raised when an element does not belong to any known export-format version."""


class TableError(ConversionError):
    """Raised when a table is written to out of order."""


class ParseExecutionError(ConversionError):
    """Raised by the pipeline when a conversion run fails."""
