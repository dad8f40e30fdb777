"""A minimal in-process saga: ordered steps, each paired with an undo action.

Steps run strictly in sequence against a shared context dict. When a step
raises, the undo actions of the failing step and every step before it run in
reverse order. Undo actions only reverse what the context records as done,
so the failing step's undo covers any partial progress it made.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SagaFailed(Exception):
    """A saga step failed. Carries the step, the cause and any undo failures."""

    def __init__(self, step: str, error: Exception, compensation_errors: list[tuple[str, Exception]] | None = None):
        self.step = step
        self.error = error
        self.compensation_errors = compensation_errors or []
        super().__init__(f"Step '{step}' failed: {error}")


@dataclass(frozen=True)
class SagaStep:
    name: str
    action: Callable[[dict], Any]
    compensation: Callable[[dict], None] | None = None


class Saga:
    def __init__(
        self,
        name: str,
        steps: list[SagaStep],
        compensate: bool = True,
        failure_cls: type[SagaFailed] = SagaFailed,
    ) -> None:
        self.name = name
        self.steps = steps
        self.compensate = compensate
        self.failure_cls = failure_cls

    def run(self, context: dict | None = None) -> dict:
        context = {} if context is None else context
        attempted: list[SagaStep] = []

        for step in self.steps:
            attempted.append(step)
            logger.debug("saga_step_started", saga=self.name, step=step.name)
            try:
                step.action(context)
            except Exception as exc:
                logger.warning("saga_step_failed", saga=self.name, step=step.name, error=str(exc))
                context["failed_step"] = step.name
                context["error"] = str(exc)
                compensation_errors = self._compensate(attempted, context) if self.compensate else []
                raise self.failure_cls(step.name, exc, compensation_errors) from exc
            logger.debug("saga_step_completed", saga=self.name, step=step.name)

        return context

    def _compensate(self, attempted: list[SagaStep], context: dict) -> list[tuple[str, Exception]]:
        failures = []
        for step in reversed(attempted):
            if step.compensation is None:
                continue
            try:
                step.compensation(context)
                logger.info("saga_step_compensated", saga=self.name, step=step.name)
            except Exception as exc:
                logger.error("saga_compensation_failed", saga=self.name, step=step.name, error=str(exc))
                failures.append((step.name, exc))
        return failures
