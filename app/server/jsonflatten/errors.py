class FlattenError(ValueError):
    """Base class for errors raised while flattening."""


class NotValidInputError(FlattenError):
    """Raised when a value that must be decomposed is not a mapping or sequence."""

    def __init__(self, message: str = "not a valid input: mapping or sequence"):
        super().__init__(message)


class NotValidJsonInputError(FlattenError):
    """Raised when JSON text does not hold an object."""

    def __init__(self, message: str = "not a valid input, must be a mapping"):
        super().__init__(message)
