from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from autowirer.exceptions import AutoWirerCleanupError

logger = logging.getLogger(__name__)


class ExceptionCollector:
    """Run tasks immediately, keeping their exceptions for a single final raise."""

    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def run(self, task: Callable[..., Any], *args: Any) -> None:
        try:
            task(*args)
        except Exception as e:  # noqa: BLE001
            logger.debug("Cleanup task %r failed: %r", task, e)
            self.errors.append(e)

    def raise_if_failed(self) -> None:
        """Raise the first collected error, with the rest attached as suppressed."""
        if not self.errors:
            return
        primary, *suppressed = self.errors
        raise AutoWirerCleanupError(primary, suppressed) from primary
