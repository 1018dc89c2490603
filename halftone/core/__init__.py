"""
Halftone Core Module

Contains the core data structures:
- ProcessingOptions: Settings shared by a batch
- Job / Result: Per-image input and output
- BatchRequest / BatchProgress / BatchResponse: Orchestrator messages
- Errors: Failure taxonomy
"""

from .errors import (
    HalftoneError, DecodeFailure, EncodeFailure,
    InvalidOptions, BatchInProgress
)
from .options import ProcessingOptions, DitherMode, ToneMode, CM_PER_INCH
from .batch import (
    Job, Result, ResultStatus,
    BatchRequest, BatchProgress, BatchResponse
)

__all__ = [
    'HalftoneError', 'DecodeFailure', 'EncodeFailure',
    'InvalidOptions', 'BatchInProgress',
    'ProcessingOptions', 'DitherMode', 'ToneMode', 'CM_PER_INCH',
    'Job', 'Result', 'ResultStatus',
    'BatchRequest', 'BatchProgress', 'BatchResponse',
]
