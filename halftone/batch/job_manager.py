"""
Batch Job Manager

Runs a batch of halftone jobs on a dedicated worker thread, one job at a
time, reporting progress after every job and isolating per-job failures.
"""

import logging
import queue
import threading
import time
from concurrent.futures import Future
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from ..core.batch import (
    BatchProgress, BatchRequest, BatchResponse,
    Job, Result, ResultStatus
)
from ..core.errors import BatchInProgress, InvalidOptions
from ..core.options import ProcessingOptions
from ..image.dithering import halftone_process
from ..image.resample import resize, target_size
from ..io.image_codec import decode_image, encode_png
from ..io.png_dpi import embed_physical_resolution

logger = logging.getLogger(__name__)

Decoder = Callable[[bytes], np.ndarray]
Encoder = Callable[[np.ndarray], bytes]


class BatchState(Enum):
    """Batch execution states."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


class BatchOrchestrator:
    """
    Sequences image jobs through the halftone pipeline.

    Features:
    - One batch at a time, run on a background thread
    - Progress messages on a queue and to callbacks
    - Failed jobs fall back to their original image
    - Cooperative cancellation between jobs

    Example:
        >>> progress = queue.Queue()
        >>> orchestrator = BatchOrchestrator(progress_queue=progress)
        >>> future = orchestrator.submit(BatchRequest(jobs, options))
        >>> response = future.result()
    """

    def __init__(self,
                 progress_queue: Optional["queue.Queue[BatchProgress]"] = None,
                 decoder: Decoder = decode_image,
                 encoder: Encoder = encode_png):
        """
        Initialize the orchestrator.

        Args:
            progress_queue: Receives one BatchProgress per completed job
            decoder: Turns encoded bytes into an RGBA array
            encoder: Turns an RGBA array into PNG bytes
        """
        self.progress_queue = progress_queue
        self.decoder = decoder
        self.encoder = encoder

        self._state = BatchState.IDLE
        self._state_lock = threading.Lock()
        self._cancel_event = threading.Event()
        self._worker_thread: Optional[threading.Thread] = None

        self._progress_callbacks: List[Callable[[BatchProgress], None]] = []

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == BatchState.RUNNING

    def add_progress_callback(self, callback: Callable[[BatchProgress], None]):
        """Register callback for progress updates."""
        self._progress_callbacks.append(callback)

    def remove_progress_callback(self, callback: Callable[[BatchProgress], None]):
        """Remove a progress callback."""
        if callback in self._progress_callbacks:
            self._progress_callbacks.remove(callback)

    def submit(self, request: BatchRequest) -> "Future[BatchResponse]":
        """
        Start a batch on the worker thread.

        Args:
            request: Jobs and options for the batch

        Returns:
            Future resolved with the BatchResponse

        Raises:
            InvalidOptions: If the options fail validation; no job runs
            BatchInProgress: If another batch is still running
        """
        self._begin(request.options)

        future: "Future[BatchResponse]" = Future()
        future.set_running_or_notify_cancel()

        self._worker_thread = threading.Thread(
            target=self._worker_loop, args=(request, future),
            name="halftone-batch", daemon=True
        )
        self._worker_thread.start()
        return future

    def run(self, request: BatchRequest) -> BatchResponse:
        """
        Run a batch to completion on the calling thread.

        Raises:
            InvalidOptions: If the options fail validation; no job runs
            BatchInProgress: If another batch is still running
        """
        self._begin(request.options)
        try:
            return self._run_batch(request)
        finally:
            self._finish()

    def cancel(self):
        """
        Ask the running batch to stop after the current job.

        Jobs skipped this way get CANCELLED results but emit no progress,
        so fewer than ``total`` progress messages arrive for the batch.
        """
        if self.is_running:
            logger.info("Cancellation requested")
            self._cancel_event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread. Returns True if it has finished."""
        thread = self._worker_thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def shutdown(self, timeout: Optional[float] = 2.0):
        """Cancel any running batch and wait for the worker thread."""
        self.cancel()
        self.wait(timeout)

    def _begin(self, options: ProcessingOptions):
        is_valid, error = options.validate()
        if not is_valid:
            raise InvalidOptions(error)

        with self._state_lock:
            if self._state == BatchState.RUNNING:
                raise BatchInProgress("A batch is already running")
            self._state = BatchState.RUNNING
            self._cancel_event.clear()

    def _finish(self):
        with self._state_lock:
            self._state = BatchState.COMPLETED

    def _worker_loop(self, request: BatchRequest, future: "Future[BatchResponse]"):
        """Worker thread body: run the batch and resolve the future."""
        try:
            response = self._run_batch(request)
        except Exception as e:
            logger.exception("Batch aborted unexpectedly")
            self._finish()
            future.set_exception(e)
            return
        self._finish()
        future.set_result(response)

    def _run_batch(self, request: BatchRequest) -> BatchResponse:
        start = time.perf_counter()
        total = len(request.jobs)
        results: List[Result] = []

        logger.info("Starting batch of %d image(s)", total)

        for i, job in enumerate(request.jobs):
            if self._cancel_event.is_set():
                results.append(Result.fallback(
                    job, "Batch cancelled", status=ResultStatus.CANCELLED
                ))
                continue

            results.append(self._process_job(job, request.options))
            self._notify_progress(BatchProgress(current=i + 1, total=total))

        duration_ms = (time.perf_counter() - start) * 1000.0
        response = BatchResponse(results=results, duration_ms=duration_ms)

        logger.info(
            "Batch complete: %d image(s) in %.2fs, %d fallback(s)",
            total, duration_ms / 1000.0, response.fallback_count
        )
        return response

    def _process_job(self, job: Job, options: ProcessingOptions) -> Result:
        """Run one job through the pipeline, falling back on any failure."""
        try:
            rgba = self.decoder(job.data)
            src_height, src_width = rgba.shape[:2]
            logger.debug("[%s] Original size: %dx%d", job.id, src_width, src_height)

            width, height = target_size(
                src_width, src_height, options.output_width_cm, options.print_dpi
            )
            logger.debug(
                "[%s] Target size: %dx%d (%scm @ %s DPI)",
                job.id, width, height, options.output_width_cm, options.print_dpi
            )

            resized = resize(rgba, width, height)
            processed = halftone_process(resized, options)

            encoded = self.encoder(processed)
            output = embed_physical_resolution(encoded, options.print_dpi)
        except Exception as e:
            logger.exception("[%s] Processing failed, keeping original", job.id)
            return Result.fallback(job, str(e))

        return Result(
            id=job.id,
            original=job.data,
            output=output,
            width=width,
            height=height,
        )

    def _notify_progress(self, progress: BatchProgress):
        """Publish progress to the queue and all callbacks."""
        if self.progress_queue is not None:
            self.progress_queue.put(progress)

        for callback in self._progress_callbacks:
            try:
                callback(progress)
            except Exception:
                logger.exception("Progress callback error")
