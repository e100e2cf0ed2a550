# core/exceptions.py
from medchain.models.enums import ErrorCategory


class ConfigurationError(Exception):
    pass


class LedgerError(Exception):
    """A ledger failure reduced to a stable category and a readable message"""

    def __init__(self, category, message):
        super().__init__(message)
        self.category = category
        self.message = message

    @classmethod
    def from_classified(cls, classified):
        return cls(classified.category, classified.message)

    def to_dict(self):
        return {
            'error': self.message,
            'category': self.category.value
        }

    def __repr__(self):
        return f"{type(self).__name__}({self.category.value!r}, {self.message!r})"


class WritesDisabledError(LedgerError):

    def __init__(self, message='Server writes disabled - set DEV_ALLOW_SERVER_WRITES=true'):
        super().__init__(ErrorCategory.WRITES_DISABLED, message)
