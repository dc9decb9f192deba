"""Exceptions raised at the edges of the notation engine.

Layout and rasterization never raise for a well-formed plan; these cover
loading input and writing output.
"""


class EngravingError(Exception):
    """Base exception for score rendering errors."""

    pass


class InputError(EngravingError):
    """Exception raised when transcription data is invalid."""

    pass


class ExportError(EngravingError):
    """Exception raised when a surface cannot be encoded or written."""

    pass
