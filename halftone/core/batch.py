"""
Batch Data Model

Jobs going into a batch, results coming out, and the progress and
response messages exchanged with the orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .options import ProcessingOptions


class ResultStatus(Enum):
    """How a job's result was produced."""
    PROCESSED = "processed"
    FALLBACK = "fallback"    # pipeline failed, output is the original
    CANCELLED = "cancelled"  # batch cancelled before the job ran


@dataclass
class Job:
    """One input image admitted to a batch."""
    id: str
    data: bytes
    width: int
    height: int

    @classmethod
    def from_file(cls, filepath: Union[str, Path],
                  job_id: Optional[str] = None) -> "Job":
        """
        Create a job from an image file on disk.

        Args:
            filepath: Path to the image file
            job_id: Identifier for the job (defaults to the file stem)

        Raises:
            DecodeFailure: If the file is not a readable image
        """
        from ..io.image_codec import read_size

        path = Path(filepath)
        data = path.read_bytes()
        width, height = read_size(data)
        return cls(id=job_id or path.stem, data=data, width=width, height=height)


@dataclass
class Result:
    """Outcome of a single job."""
    id: str
    original: bytes
    output: bytes
    width: int
    height: int
    status: ResultStatus = ResultStatus.PROCESSED
    error_message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == ResultStatus.PROCESSED

    @classmethod
    def fallback(cls, job: Job, error_message: str = "",
                 status: ResultStatus = ResultStatus.FALLBACK) -> "Result":
        """Result that reuses the job's original bytes and dimensions."""
        return cls(
            id=job.id,
            original=job.data,
            output=job.data,
            width=job.width,
            height=job.height,
            status=status,
            error_message=error_message,
        )


@dataclass
class BatchRequest:
    """A set of jobs processed under one set of options."""
    jobs: List[Job]
    options: ProcessingOptions = field(default_factory=ProcessingOptions)


@dataclass(frozen=True)
class BatchProgress:
    """Sent once per completed job; current runs from 1 to total."""
    current: int
    total: int

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 100
        return round(self.current / self.total * 100)


@dataclass
class BatchResponse:
    """Final message of a batch: every result plus the wall-clock duration."""
    results: List[Result]
    duration_ms: float

    @property
    def fallback_count(self) -> int:
        return sum(1 for r in self.results if r.status == ResultStatus.FALLBACK)
