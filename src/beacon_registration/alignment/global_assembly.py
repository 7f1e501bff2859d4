"""
Global Frame Assembly

Places every scanner in one global frame. The first report is anchored at the
origin with identity orientation; the remaining scanners are placed one at a
time by aligning them against any scanner already solved, so scanners that
never overlap the reference directly are reached through chains.

Pairs are scanned solved-major, unsolved-minor, both in insertion order, and
the first successful pair places its scanner. Solved scanners never change, so
the outcome of a pair is final and is remembered instead of recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..acceleration.parallel_executor import PairParallelExecutor
from ..utils.geometry import Point
from ..utils.logging import setup_logger
from .fingerprint import FingerprintCache, FingerprintIndex
from .pairwise_registration import Alignment, PairwiseAligner
from .scanner import ScannerReport, SolvedScanner

logger = setup_logger(__name__)

PairKey = Tuple[int, int]


class DisconnectedDatasetError(RuntimeError):
    """Raised when some scanners cannot be linked to the reference scanner."""

    def __init__(self, solved: List[SolvedScanner], unsolved_ids: List[int]):
        self.solved = solved
        self.unsolved_ids = unsolved_ids
        super().__init__(
            f"Could not place {len(unsolved_ids)} of {len(solved) + len(unsolved_ids)} scanners "
            f"(unsolved: {unsolved_ids}); they share too few beacons with any solved scanner"
        )


@dataclass
class AssemblyResult:
    solved: List[SolvedScanner]
    attempts: int = 0

    @property
    def positions(self) -> Dict[int, Point]:
        return {s.scanner_id: s.position for s in self.solved}

    def __len__(self) -> int:
        return len(self.solved)


@dataclass
class _AssemblyState:
    solved: List[SolvedScanner]
    unsolved: List[ScannerReport]
    outcomes: Dict[PairKey, Optional[Alignment]] = field(default_factory=dict)
    attempts: int = 0

    def pending_pairs(self) -> List[Tuple[SolvedScanner, ScannerReport]]:
        return [
            (base, report)
            for base in self.solved
            for report in self.unsolved
            if (base.scanner_id, report.scanner_id) not in self.outcomes
        ]


def align_pair_task(
    task: Tuple[Sequence, Sequence, FingerprintIndex, FingerprintIndex],
    *,
    min_overlap: int,
    orientations: str,
) -> Optional[Alignment]:
    """Picklable worker used for parallel passes."""
    a_points, b_points, a_index, b_index = task
    aligner = PairwiseAligner(min_overlap=min_overlap, orientations=orientations)
    return aligner.align_points(a_points, b_points, a_index, b_index)


class GlobalAssembler:
    """
    Grows the set of solved scanners until every report is placed.

    Args:
        aligner: Pairwise aligner to use (defaults to PairwiseAligner())
        executor: Optional parallel executor; with more than one worker each
            pass aligns all untried pairs at once, then resolves them in scan
            order so the result matches the sequential path
    """

    def __init__(
        self,
        aligner: Optional[PairwiseAligner] = None,
        executor: Optional[PairParallelExecutor] = None,
    ):
        self.aligner = aligner or PairwiseAligner()
        self.executor = executor

    def assemble(
        self,
        reports: Sequence[ScannerReport],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> AssemblyResult:
        """
        Place all scanners in the global frame.

        Args:
            reports: Scanner reports; the first one defines the global frame
            progress_callback: Called after each placement with
                (solved_count, total_count)

        Returns:
            AssemblyResult with solved scanners in placement order

        Raises:
            ValueError: If reports is empty or scanner ids repeat
            DisconnectedDatasetError: If a full pass places no scanner
        """
        if not reports:
            raise ValueError("No scanner reports to assemble")
        ids = [r.scanner_id for r in reports]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate scanner ids in input: {ids}")

        total = len(reports)
        cache = FingerprintCache()
        for report in reports:
            cache.get(report.scanner_id, report.beacons)

        state = _AssemblyState(
            solved=[SolvedScanner.reference(reports[0])],
            unsolved=list(reports[1:]),
        )
        logger.info(f"Assembling {total} scanners; scanner {reports[0].scanner_id} is the reference")
        if progress_callback:
            progress_callback(1, total)

        while state.unsolved:
            if self._use_parallel():
                self._evaluate_pending(state, cache)

            found = self._first_success(state, cache)
            if found is None:
                unsolved_ids = [r.scanner_id for r in state.unsolved]
                logger.error(
                    f"Assembly stalled with {len(state.solved)}/{total} scanners placed; "
                    f"unsolved: {unsolved_ids}"
                )
                raise DisconnectedDatasetError(list(state.solved), unsolved_ids)

            base, report, alignment = found
            placed = self._place(base, report, alignment)
            state.solved.append(placed)
            state.unsolved.remove(report)
            logger.info(
                f"Placed scanner {placed.scanner_id} via scanner {base.scanner_id} at {placed.position} "
                f"({len(state.solved)}/{total})"
            )
            if progress_callback:
                progress_callback(len(state.solved), total)

        logger.info(f"All {total} scanners placed after {state.attempts} alignment attempts")
        return AssemblyResult(solved=state.solved, attempts=state.attempts)

    # ------------------------ Helpers ------------------------
    def _use_parallel(self) -> bool:
        return self.executor is not None and self.executor.n_workers > 1

    def _first_success(
        self, state: _AssemblyState, cache: FingerprintCache
    ) -> Optional[Tuple[SolvedScanner, ScannerReport, Alignment]]:
        for base in state.solved:
            for report in state.unsolved:
                key = (base.scanner_id, report.scanner_id)
                if key not in state.outcomes:
                    state.outcomes[key] = self.aligner.align(
                        base,
                        report,
                        cache.get(base.scanner_id, base.relative_beacons),
                        cache.get(report.scanner_id, report.beacons),
                    )
                    state.attempts += 1
                alignment = state.outcomes[key]
                if alignment is not None:
                    return base, report, alignment
        return None

    def _evaluate_pending(self, state: _AssemblyState, cache: FingerprintCache) -> None:
        pending = state.pending_pairs()
        if not pending:
            return
        tasks = [
            (
                base.relative_beacons,
                report.beacons,
                cache.get(base.scanner_id, base.relative_beacons),
                cache.get(report.scanner_id, report.beacons),
            )
            for base, report in pending
        ]
        logger.debug(f"Aligning {len(tasks)} scanner pairs in parallel")
        results = self.executor.map_tasks(
            tasks,
            align_pair_task,
            {"min_overlap": self.aligner.min_overlap, "orientations": self.aligner.orientations},
        )
        for (base, report), alignment in zip(pending, results):
            state.outcomes[(base.scanner_id, report.scanner_id)] = alignment
        state.attempts += len(tasks)

    @staticmethod
    def _place(base: SolvedScanner, report: ScannerReport, alignment: Alignment) -> SolvedScanner:
        relative = tuple(alignment.orientation.apply(b) for b in report.beacons)
        return SolvedScanner(
            scanner_id=report.scanner_id,
            position=base.position + alignment.translation,
            orientation=alignment.orientation,
            relative_beacons=relative,
        )
