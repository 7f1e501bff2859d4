"""
Parallel execution of independent alignment attempts.

Provides PairParallelExecutor for distributing pure per-pair work across
multiple CPU cores using multiprocessing, returning results in input order.
"""

from __future__ import annotations

import logging
import time
from multiprocessing import Pool, cpu_count
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _worker_wrapper(args: Tuple[int, Any, Callable, Dict[str, Any]]) -> Tuple[int, Any, Optional[str]]:
    """Run one task in a pool process and return (task_index, result, error_message)."""
    idx, task, worker_fn, worker_kwargs = args
    try:
        return (idx, worker_fn(task, **worker_kwargs), None)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        logger.error(f"Alignment task {idx} failed: {error_msg}")
        return (idx, None, error_msg)


class PairParallelExecutor:
    """
    Parallel executor for independent scanner-pair alignments.

    Each task must be a pure function of its inputs; results are collected in
    the same order as the tasks so callers can resolve them deterministically.

    Example:
        executor = PairParallelExecutor(n_workers=4)
        results = executor.map_tasks(
            tasks=pair_list,
            worker_fn=align_pair_task,
            worker_kwargs={'min_overlap': 12, 'orientations': 'all'}
        )
    """

    def __init__(self, n_workers: Optional[int] = None):
        """n_workers defaults to one less than the CPU count and is at least 1."""
        if n_workers is None:
            n_workers = max(1, cpu_count() - 1)
        else:
            n_workers = max(1, int(n_workers))
        self.n_workers = n_workers

        logger.info(
            f"Initialized PairParallelExecutor with {self.n_workers} workers "
            f"(total CPUs: {cpu_count()})"
        )

    def map_tasks(
        self,
        tasks: List[Any],
        worker_fn: Callable,
        worker_kwargs: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """
        Apply worker_fn to every task and return the results in task order.

        Args:
            tasks: Work items; each is passed as the first argument to worker_fn
            worker_fn: Picklable function with signature worker_fn(task, **worker_kwargs)
            worker_kwargs: Fixed keyword arguments passed to each call

        Returns:
            List of results in the same order as tasks

        Raises:
            RuntimeError: If any task fails
        """
        worker_kwargs = worker_kwargs or {}
        n_tasks = len(tasks)
        if n_tasks == 0:
            return []

        start_time = time.time()

        # a pool is not worth starting for a single worker or task
        if self.n_workers == 1 or n_tasks == 1:
            results = []
            for i, task in enumerate(tasks):
                try:
                    results.append(worker_fn(task, **worker_kwargs))
                except Exception as e:
                    logger.error(f"Error processing task {i}: {e}", exc_info=True)
                    raise RuntimeError(f"Task processing failed: {e}") from e
            return results

        results_dict: Dict[int, Any] = {}
        errors: List[Tuple[int, str]] = []
        worker_args = [(i, task, worker_fn, worker_kwargs) for i, task in enumerate(tasks)]
        with Pool(processes=self.n_workers) as pool:
            for idx, result, error in pool.imap_unordered(_worker_wrapper, worker_args):
                if error:
                    errors.append((idx, error))
                else:
                    results_dict[idx] = result

        if errors:
            error_msg = f"{len(errors)} tasks failed out of {n_tasks}"
            logger.error(error_msg)
            for idx, error in errors[:5]:
                logger.error(f"  Task {idx}: {error}")
            raise RuntimeError(f"{error_msg}; first error: {errors[0][1]}")

        elapsed = time.time() - start_time
        logger.debug(f"Processed {n_tasks} tasks with {self.n_workers} workers in {elapsed:.2f}s")

        return [results_dict[i] for i in range(n_tasks)]
