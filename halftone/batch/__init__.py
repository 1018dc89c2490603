"""
Halftone Batch Module

Batch orchestration: sequencing jobs, progress and failure isolation.
"""

from .job_manager import BatchOrchestrator, BatchState

__all__ = ['BatchOrchestrator', 'BatchState']
