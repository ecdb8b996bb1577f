class IdAllocator:
    """Hands out node ids for one conversion; never shared between conversions."""

    def __init__(self, base: int = 0):
        self._next = base

    def next_id(self) -> int:
        current = self._next
        self._next += 1
        return current

    @property
    def allocated(self) -> int:
        return self._next
