#!/usr/bin/env python3

"""Progress tracking for declaration parsing and emission."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from time import time

import psutil


class ProgressTracker:
    """
    Track and report front end progress.

    Counts declaration sources, applied declarations and failed blocks, and
    keeps a stack of named operations for contextual log messages.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize progress tracker.

        Args:
            logger: Logger instance for progress reporting
        """
        self.logger = logger
        self.start_time = time()
        self.source_count = 0
        self.declaration_count = 0
        self.failure_count = 0
        self.operation_stack: list[tuple[str, float]] = []

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """
        Track a high-level operation with timing.

        Args:
            operation_name: Name of the operation being tracked
        """
        start_time = time()
        self.operation_stack.append((operation_name, start_time))

        self.logger.debug(f"Starting operation: {operation_name}")

        try:
            yield
            elapsed = time() - start_time
            self.logger.debug(f"Completed operation: {operation_name} in {elapsed:.3f}s")
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Failed operation: {operation_name} after {elapsed:.3f}s: {e}")
            raise
        finally:
            self.operation_stack.pop()

    @contextmanager
    def track_source(self, source: str | Path) -> Iterator[None]:
        """
        Track one declaration source (a file or an in-memory string).

        Args:
            source: Name of the source being parsed
        """
        self.source_count += 1
        source_start = time()
        initial_declarations = self.declaration_count
        initial_failures = self.failure_count

        self.logger.debug(f"Parsing source #{self.source_count}: {source}")

        try:
            yield
        except Exception as e:
            elapsed = time() - source_start
            self.logger.error(f"Source {source} aborted after {elapsed:.3f}s: {e}")
            raise

        elapsed = time() - source_start
        self.logger.debug(
            f"Source {source} done in {elapsed:.3f}s "
            f"({self.declaration_count - initial_declarations} declarations, "
            f"{self.failure_count - initial_failures} failed)"
        )

    def count_declaration(self) -> None:
        """Increment the applied declaration counter."""
        self.declaration_count += 1

    def count_failure(self) -> None:
        """Increment the failed block counter."""
        self.failure_count += 1

    def report_summary(self) -> None:
        """Report final processing statistics."""
        total_time = time() - self.start_time
        rate = self.declaration_count / total_time if total_time > 0 else 0

        self.logger.info(
            f"Parsing complete: {self.source_count} sources, "
            f"{self.declaration_count} declarations, {self.failure_count} failed "
            f"in {total_time:.2f}s ({rate:.1f} declarations/s)"
        )

    def get_current_context(self) -> str:
        """
        Get current operation context for logging.

        Returns:
            String describing current operation stack
        """
        if not self.operation_stack:
            return "idle"

        return " > ".join(op[0] for op in self.operation_stack)

    def log_memory_usage(self) -> None:
        """Log the resident memory of the current process."""
        try:
            memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.debug(f"Could not get memory usage: {e}")
            return
        self.logger.debug(f"Memory usage: {memory_mb:.1f} MB")

    def reset(self) -> None:
        """Reset all counters and timers."""
        self.start_time = time()
        self.source_count = 0
        self.declaration_count = 0
        self.failure_count = 0
        self.operation_stack.clear()
