# engine/errors.py
from __future__ import annotations


class QuizError(Exception):
    """Base class for everything the quiz engine raises on purpose."""


class LoadError(QuizError):
    """Catalog could not be fetched or parsed. No partial catalog is kept."""


class ValidationError(QuizError):
    """A user action was rejected; the ledger was not touched."""


class PersistenceError(QuizError):
    """Storage read/write/remove failed. Logged, never shown to the user."""


class ModeUnavailableError(QuizError):
    """Wrong-only view requested while there are no wrong answers."""
