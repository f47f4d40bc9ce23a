import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class SagaStep:
    name: str
    action: Callable[[dict], Any]
    compensate: Optional[Callable[[dict], None]] = None


class SagaCompensationFailed(Exception):
    """A step failed and at least one compensation failed while unwinding."""

    def __init__(self, step: str, error: Exception, failures: list[tuple[str, Exception]]):
        self.step = step
        self.error = error
        self.failures = failures
        detail = "; ".join(f"{name}: {exc}" for name, exc in failures)
        super().__init__(f"{step} failed ({error}); compensation failed ({detail})")


class Saga:
    """
    Ordered store calls with compensating inverses.

    Each action receives the shared context dict and its return value is
    stored under the step name, so later steps can use earlier results.
    Execution stops at the first failing step; the compensations of the steps
    that already completed then run in reverse order. If they all succeed the
    original error is re-raised unchanged.
    """

    def __init__(self, name: str):
        self.name = name
        self._steps: list[SagaStep] = []

    def step(self, name: str, action, compensate=None) -> "Saga":
        self._steps.append(SagaStep(name, action, compensate))
        return self

    def run(self) -> dict:
        context: dict = {}
        completed: list[SagaStep] = []
        for step in self._steps:
            try:
                context[step.name] = step.action(context)
            except Exception as exc:
                logger.warning("%s: step '%s' failed: %s", self.name, step.name, exc)
                failures = self._unwind(completed, context)
                if failures:
                    raise SagaCompensationFailed(step.name, exc, failures) from exc
                raise
            completed.append(step)
        return context

    def _unwind(self, completed: list[SagaStep], context: dict) -> list[tuple[str, Exception]]:
        failures = []
        for step in reversed(completed):
            if step.compensate is None:
                continue
            try:
                step.compensate(context)
            except Exception as exc:
                logger.warning("%s: compensating '%s' failed: %s", self.name, step.name, exc)
                failures.append((step.name, exc))
        return failures
