"""Exceptions raised by bodix."""


class BodixError(Exception):
    """Base class for bodix errors."""


class InvalidGoal(BodixError, ValueError):
    """Raised when a daily step goal is below the allowed floor."""

    def __init__(self, value: int, minimum: int):
        self.value = value
        self.minimum = minimum
        super().__init__(f"Daily goal must be at least {minimum} steps (got {value})")


class InvalidWeight(BodixError, ValueError):
    """Raised when a body weight is not a positive number."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Weight must be a positive, finite number of kg (got {value})")
