from __future__ import annotations

from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable


class Answer(Enum):
    """Outcome of a three-way "save changes?" prompt."""

    YES = auto()
    NO = auto()
    CANCEL = auto()


@runtime_checkable
class IMessageService(Protocol):
    """
    Abstract UI port for showing messages. Decouples business logic from Qt widgets.
    """

    def info(self, parent: Any | None, title: str, text: str) -> None: ...
    def warning(self, parent: Any | None, title: str, text: str) -> None: ...
    def error(self, parent: Any | None, title: str, text: str) -> None: ...

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        """Yes/No question; True for Yes."""
        ...

    def ask_save_changes(self, parent: Any | None, title: str, text: str) -> Answer:
        """Yes/No/Cancel question used before discarding unsaved edits."""
        ...
