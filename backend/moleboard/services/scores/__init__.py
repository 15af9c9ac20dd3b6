"""Score domain services: validation, cooldowns and best-of-day storage.

HTTP routes and CLI commands call into this package, keeping transport
concerns separated from the submission rules.
"""

from .errors import InvalidPayload, InvalidScore, ScoreError, StorageError, TooFast
from .submission import ScoreService

__all__ = [
    'InvalidPayload',
    'InvalidScore',
    'ScoreError',
    'ScoreService',
    'StorageError',
    'TooFast',
]
