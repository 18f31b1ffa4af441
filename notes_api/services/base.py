"""
Base Service.

Base class for domain services. Services receive their collaborators
through the constructor and log through the shared structlog setup.

Usage:
    class NoteService(BaseService):
        def __init__(self, repository: NoteRepository) -> None:
            super().__init__()
            self.repo = repository
"""

from typing import Any

from notes_api.core.logging import get_logger


class BaseService:
    """Base class for all services."""

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a state-changing operation at info level."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log a read at debug level."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
