"""Generation tokens for overlapping async operations of the same kind."""


class OperationFence:
    """Issues monotonically increasing tokens for one operation type.

    Every started operation takes a token; when it resolves it may only write
    shared state if its token is still the latest one issued. Results of
    operations that were overtaken by a newer one are discarded.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._generation = 0

    def issue(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    @property
    def latest(self) -> int:
        return self._generation
