class ScoreError(Exception):
    """Base for failures reported back to the submitting client."""
    status_code = 400
    message = 'error'

    def __init__(self, detail=None):
        super().__init__(detail or self.message)
        self.detail = detail

    def to_dict(self):
        return {'error': self.message}


class InvalidPayload(ScoreError):
    status_code = 400
    message = 'invalid payload'


class InvalidScore(ScoreError):
    status_code = 400
    message = 'invalid score'


class TooFast(ScoreError):
    status_code = 429
    message = 'too fast'


class StorageError(ScoreError):
    status_code = 500
    message = 'db error'
