"""Error taxonomy for tree operations.

Every failure raised by the core derives from FileSystemError and carries a
``kind`` naming the condition. None of them are fatal: callers report the
message and carry on with the session.
"""


class FileSystemError(Exception):
    """Base class for all tree operation failures."""

    kind = "FileSystemError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind)
        self.message = message or self.kind

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class NotADirectory(FileSystemError):
    kind = "NotADirectory"


class NameCollision(FileSystemError):
    kind = "NameCollision"


class NotFound(FileSystemError, LookupError):
    kind = "NotFound"


class InvalidName(FileSystemError, ValueError):
    kind = "InvalidName"


class CannotDeleteRoot(FileSystemError):
    kind = "CannotDeleteRoot"


class CannotDeleteCurrent(FileSystemError):
    kind = "CannotDeleteCurrent"


class CannotDeleteAncestorOfCurrent(FileSystemError):
    kind = "CannotDeleteAncestorOfCurrent"


class CannotMoveRoot(FileSystemError):
    kind = "CannotMoveRoot"


class DestinationNotDirectory(FileSystemError):
    kind = "DestinationNotDirectory"


class CyclicMove(FileSystemError):
    kind = "CyclicMove"


class AlreadyAtRoot(FileSystemError):
    kind = "AlreadyAtRoot"
