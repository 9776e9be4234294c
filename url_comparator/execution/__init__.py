"""Execution - isolated comparison tasks and batch orchestration."""

from .batch import BatchOrchestrator, chunk_pairs
from .task_runner import ConcurrentTaskRunner

__all__ = ["BatchOrchestrator", "ConcurrentTaskRunner", "chunk_pairs"]
