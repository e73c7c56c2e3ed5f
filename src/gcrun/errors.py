class GCRunError(Exception):
    """Base class for errors raised by gcrun."""


class WeightTableError(GCRunError, ValueError):
    pass


class UnknownStrategyError(GCRunError, LookupError):
    pass


class StrategyMismatchError(GCRunError, AssertionError):
    def __init__(self, strategy: str, sequence: str, expected: int, got: int):
        self.strategy = strategy
        self.sequence = sequence
        self.expected = expected
        self.got = got
        super().__init__(
            f"strategy {strategy!r} disagrees on sequence {sequence!r}: expected {expected}, got {got}"
        )


class DuplicateSequenceError(GCRunError, ValueError):
    pass


class ArtifactNotFoundError(GCRunError, FileNotFoundError):
    pass
