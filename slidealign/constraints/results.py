"""Operation results and the per-element mutation fold."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from slidealign.errors import MutationError
from slidealign.host.base import HostShape

logger = logging.getLogger(__name__)


@dataclass
class MutationOutcome:
    """Outcome of the mutations issued for one object."""

    object_id: str
    error: MutationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def attempt(shape: HostShape, *mutations: Callable[[], None]) -> MutationOutcome:
    """Run the mutations for one object, capturing a host refusal.

    Mutations run in order and stop at the first ``MutationError``. Any other
    exception propagates.
    """
    try:
        for mutate in mutations:
            mutate()
    except MutationError as e:
        logger.warning(f"Host rejected change on {shape.id}: {e.message}")
        return MutationOutcome(object_id=shape.id, error=e)
    return MutationOutcome(object_id=shape.id)


@dataclass
class OperationResult:
    """Summary of one engine operation."""

    operation: str
    verb: str = "moved"
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    rejected: bool = False
    message: str | None = None
    failed_ids: list[str] = field(default_factory=list)

    @classmethod
    def reject(cls, operation: str, message: str) -> "OperationResult":
        """A precondition or whole-operation failure with no side effects."""
        logger.info(f"{operation} rejected: {message}")
        return cls(operation=operation, rejected=True, message=message)

    @classmethod
    def fold(
        cls,
        operation: str,
        outcomes: Iterable[MutationOutcome],
        verb: str = "moved",
        skipped: int = 0,
    ) -> "OperationResult":
        """Fold per-object outcomes into success and failure counts."""
        result = cls(operation=operation, verb=verb, skipped=skipped)
        for outcome in outcomes:
            if outcome.ok:
                result.succeeded += 1
            else:
                result.failed += 1
                result.failed_ids.append(outcome.object_id)

        logger.info(
            f"{operation}: {result.succeeded} {verb}, {result.failed} failed, {result.skipped} skipped"
        )
        return result

    @property
    def ok(self) -> bool:
        return not self.rejected and self.failed == 0

    def summary(self) -> str:
        """Human-readable status line."""
        if self.rejected or self.message:
            return f"{self.operation}: {self.message}"

        text = f"{self.operation}: {self.verb} {_count(self.succeeded)}"
        if self.failed:
            text += f", {self.failed} could not be changed"
        if self.skipped:
            text += f", {self.skipped} skipped"
        return text + "."

    def __str__(self) -> str:
        return self.summary()


def require_selection(operation: str, selection: list, minimum: int) -> OperationResult | None:
    """Reject ``operation`` when fewer than ``minimum`` objects are selected."""
    if len(selection) < minimum:
        return OperationResult.reject(
            operation,
            f"select at least {minimum} objects (currently {len(selection)} selected).",
        )
    return None


def _count(n: int) -> str:
    return f"{n} object" if n == 1 else f"{n} objects"
