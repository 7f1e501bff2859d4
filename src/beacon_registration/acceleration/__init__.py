"""
Acceleration Module

Optional multiprocessing support for evaluating independent scanner-pair
alignments in parallel.
"""

from .parallel_executor import PairParallelExecutor

__all__ = [
    "PairParallelExecutor",
]
