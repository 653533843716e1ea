"""Error types raised by the seed calculator."""


class SeedCalcError(Exception):
    """Base class for all calculator errors."""


class TransportError(SeedCalcError):
    """Raised when a single season's bracket page cannot be retrieved."""

    def __init__(self, season: int, message: str):
        super().__init__(f"Season {season}: {message}")
        self.season = season


class ExtractionError(SeedCalcError):
    """Raised when one bracket row cannot be parsed into a game."""


class AcquisitionError(SeedCalcError):
    """Raised when fresh game data cannot be acquired or persisted."""


class DataCorruptionError(SeedCalcError):
    """Raised when stored match data is unreadable or malformed."""

    def __init__(self, message: str):
        super().__init__(
            f"{message}. Make the same query but with the 'force' parameter "
            "included to refresh the data"
        )


class ValidationError(SeedCalcError, ValueError):
    """Raised for bad seed values or a wrong argument count."""
