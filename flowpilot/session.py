"""Caller-side state for a chat conversation."""

from __future__ import annotations

import logging
from typing import List, Optional

from .catalog import WorkflowCatalog, get_catalog
from .config import FlowpilotConfig
from .constants import DEFAULT_HISTORY_LIMIT, WELCOME_MESSAGE
from .contracts import ActiveRun, AssistantResult, Message, RunRecord
from .formatting import percent_complete
from .interpreter import Clock, interpret
from .quick_actions import derive_quick_actions

logger = logging.getLogger(__name__)


class ChatSession:
    """Owns the message list, active run, and recent run history.

    The interpreter is stateless; this class commits each result before the
    next command is interpreted. History is most-recent-first and bounded.
    """

    def __init__(
        self,
        catalog: Optional[WorkflowCatalog] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Optional[Clock] = None,
    ) -> None:
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self.catalog = catalog or get_catalog()
        self.history_limit = history_limit
        self._clock = clock
        self.messages: List[Message] = [Message.assistant(WELCOME_MESSAGE)]
        self.active_run: Optional[ActiveRun] = None
        self.history: List[RunRecord] = []
        self.quick_actions: List[str] = derive_quick_actions(None)

    @classmethod
    def from_config(
        cls, config: FlowpilotConfig, catalog: Optional[WorkflowCatalog] = None
    ) -> "ChatSession":
        return cls(
            catalog=catalog or get_catalog(config=config),
            history_limit=config.history_limit,
        )

    @property
    def progress(self) -> int:
        """Completion percentage of the active run, 0 when idle."""
        if self.active_run is None:
            return 0
        return percent_complete(
            len(self.active_run.completed_step_ids), self.active_run.total_steps
        )

    def send(self, text: str) -> Optional[AssistantResult]:
        """Interpret ``text`` and commit the outcome.

        Blank input is ignored and returns ``None``.
        """
        text = text.strip()
        if not text:
            return None

        result = interpret(
            text, self.active_run, catalog=self.catalog, clock=self._clock
        )
        self.messages.append(Message.user(text))
        self.messages.extend(result.replies)
        self.active_run = result.next_run
        self.quick_actions = derive_quick_actions(result.next_run)
        if result.closed_run is not None:
            self.history = [result.closed_run, *self.history][: self.history_limit]
            logger.info(
                f"Archived {result.closed_run.status} run of "
                f"{result.closed_run.workflow.id}"
            )
        return result
