class RowDBException(Exception):
    pass


class SyntaxErrorRDB(RowDBException):
    """Raised when a command does not match its grammar.

    `position` is the index of the offending token, or the token count when
    the command ended early.
    """

    def __init__(self, message: str, position: int):
        super().__init__(f"Syntax error at token {position}: {message}")
        self.position = position


class UnknownCommand(RowDBException):
    pass


class NoSelection(RowDBException):
    pass


class StoreAlreadyExists(RowDBException):
    pass


class StoreNotFound(RowDBException):
    pass


class InvalidStoreName(RowDBException):
    pass


class SchemaMismatch(RowDBException):
    pass


class ConstraintViolation(RowDBException):
    pass


class DuplicateKey(ConstraintViolation):
    pass


class PrimaryKeyImmutable(ConstraintViolation):
    pass


class KeyNotFound(RowDBException):
    pass


class InvalidIndexColumn(RowDBException):
    pass


class IoFailure(RowDBException):
    pass
