"""
Halftone Error Types

Exceptions raised by the conversion pipeline and the batch orchestrator.
A PNG without the expected signature is not an error: the metadata
embedder simply passes it through.
"""


class HalftoneError(Exception):
    """Base class for all halftone errors."""


class DecodeFailure(HalftoneError):
    """Input bytes are not a valid or supported image."""


class EncodeFailure(HalftoneError):
    """A pixel buffer could not be serialized to the output format."""


class InvalidOptions(HalftoneError, ValueError):
    """Processing options are outside their documented ranges."""


class BatchInProgress(HalftoneError, RuntimeError):
    """A batch was submitted while another one is still running."""
