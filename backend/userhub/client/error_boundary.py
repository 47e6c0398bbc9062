"""Error Boundary — render-time fallback for a component subtree.

Invariants:
    - Only exceptions raised while rendering the child are caught; request
      failures are component state and never reach the boundary
    - Once tripped, the fallback is shown until reset()
    - Error details appear in the fallback only when show_details is set
"""

import logging
import traceback
from typing import Callable

from userhub.core.observability_sink import ObservabilitySink
from userhub.infrastructure.observability import LoggingSink

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Something went wrong!"
FALLBACK_HINT = (
    "Please try refreshing the page or contact support "
    "if the problem persists."
)
RESET_LABEL = "[Try Again]"


class ErrorBoundary:
    def __init__(
        self,
        render_child: Callable[[], str],
        *,
        name: str = "ErrorBoundary",
        show_details: bool = False,
        sink: ObservabilitySink | None = None,
    ):
        self._render_child = render_child
        self._name = name
        self._show_details = show_details
        self._sink = sink or LoggingSink()
        self.error: Exception | None = None
        self._stack: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def render(self) -> str:
        if self.error is None:
            try:
                return self._render_child()
            except Exception as e:
                logger.error(f"{self._name} caught an error: {e}", exc_info=True)
                self.error = e
                self._stack = traceback.format_exc()
                self._sink.track_error(e, {"component": self._name})
        return self._render_fallback()

    def reset(self) -> None:
        self.error = None
        self._stack = None

    def _render_fallback(self) -> str:
        lines = [FALLBACK_TITLE, FALLBACK_HINT]
        if self._show_details:
            lines.append(f"Error Details: {self.error!r}")
            if self._stack:
                lines.append(self._stack.rstrip())
        lines.append(RESET_LABEL)
        return "\n".join(lines)
