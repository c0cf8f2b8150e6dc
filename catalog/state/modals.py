from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from catalog.errors import CatalogError, ModalStateError
from catalog.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ModalState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class ModalForm(Generic[T]):
    """
    closed -> open -> submitting -> closed (success) | open (failure).

    ``target`` is the record the modal acts on (None for the create modal).
    ``error`` holds the message of the last failed submission so the form can
    show it while staying open.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.state = ModalState.CLOSED
        self.target: Optional[T] = None
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state is not ModalState.CLOSED

    def open(self, target: Optional[T] = None) -> None:
        if self.state is ModalState.SUBMITTING:
            raise ModalStateError(f"{self.name} modal is submitting and cannot be reopened")
        self.state = ModalState.OPEN
        self.target = target
        self.error = None

    def cancel(self) -> None:
        if self.state is ModalState.SUBMITTING:
            raise ModalStateError(f"{self.name} modal cannot be closed while submitting")
        self._close()

    def submit(self, action: Callable[[], Any]) -> bool:
        """Run ``action``; close on success, stay open with ``error`` set on CatalogError."""
        if self.state is not ModalState.OPEN:
            raise ModalStateError(f"{self.name} modal is {self.state.value}, not open")
        self.state = ModalState.SUBMITTING
        try:
            action()
        except CatalogError as e:
            logger.warning(f"{self.name} modal submission failed: {e}")
            self.state = ModalState.OPEN
            self.error = str(e)
            return False
        except Exception:
            self.state = ModalState.OPEN
            raise
        self._close()
        return True

    def _close(self) -> None:
        self.state = ModalState.CLOSED
        self.target = None
        self.error = None
