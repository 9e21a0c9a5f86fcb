"""Error types raised by the pressure map pipeline"""


class PmslViewerError(Exception):
    """Base class for all load-time failures of the viewer"""


class DataSourceError(PmslViewerError, ValueError):
    """Input file is missing required variables or has mismatched dimensions"""


class InvalidInputError(PmslViewerError, ValueError):
    """Empty grid or axis passed to an analysis step"""


class DegenerateRangeWarning(UserWarning):
    """Display range has zero width; colors fall back to the ramp midpoint"""
