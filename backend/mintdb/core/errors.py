"""
Typed errors raised by the data layer.

Driver errors (pymongo) are never wrapped, with the single exception of
store-side duplicate key violations on insert, which surface as
AlreadyExistsError.
"""
from enum import Enum


class DbErrorType(str, Enum):
    """Error kinds callers can branch on."""
    MISSING_REQUIRED_ENV_VAR = "ERR_MISSING_REQUIRED_ENV_VAR"
    UNINITIALIZED = "ERR_UNINITIALIZED"
    NOT_FOUND = "ERR_UNINITIALIZED"
    ALREADY_EXISTS = "ERR_ALREADY_EXISTS"


class DbError(Exception):
    """Base error carrying a DbErrorType code."""
    
    def __init__(self, code: DbErrorType, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class MissingEnvVarError(DbError):
    """A required configuration value is empty. Fatal at construction."""
    
    def __init__(self, message: str):
        super().__init__(DbErrorType.MISSING_REQUIRED_ENV_VAR, message)


class NotFoundError(DbError):
    """An expected record is missing, or the helper was used before connect()."""
    
    def __init__(self, message: str):
        super().__init__(DbErrorType.NOT_FOUND, message)


class AlreadyExistsError(DbError):
    """A create found a conflicting record."""
    
    def __init__(self, message: str):
        super().__init__(DbErrorType.ALREADY_EXISTS, message)


class ThrottledError(NotFoundError):
    """An SMS code was requested again inside the resend window."""
    
    def __init__(self, message: str, retry_after: float):
        super().__init__(message)
        self.retry_after = retry_after
