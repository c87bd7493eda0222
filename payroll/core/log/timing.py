"""Timing helper that logs how long a query took and how many rows it produced."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    unit: str
    count: Optional[int] = None
    start: float = field(default_factory=perf_counter)

    def set_count(self, count: int) -> None:
        self.count = count

    @property
    def elapsed(self) -> float:
        return perf_counter() - self.start

    def finish(self, success: bool = True) -> None:
        elapsed = self.elapsed
        if not success:
            self.logger.error("%s failed after %.3fs", self.label, elapsed)
            return
        if self.count is None:
            self.logger.log(self.level, "%s completed in %.3fs", self.label, elapsed)
        else:
            self.logger.log(
                self.level,
                "%s completed in %.3fs (%d %s)",
                self.label,
                elapsed,
                self.count,
                self.unit,
            )


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    unit: str = "rows",
) -> Iterator[_Timer]:
    """Time the enclosed block and log the outcome.

    Args:
        label: Description of the operation being timed
        logger: Logger instance to use (defaults to "payroll.timer")
        level: Logging level for the success message
        unit: Unit reported alongside the count set via ``set_count``
    """
    timer = _Timer(
        label=label,
        logger=logger or logging.getLogger("payroll.timer"),
        level=level,
        unit=unit,
    )
    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
