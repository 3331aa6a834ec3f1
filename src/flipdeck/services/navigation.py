"""Cursor over the ordered entry sequence."""


class NavigationCursor:
    """Index of the displayed entry; wraps around at both ends."""

    def __init__(self, count: int, index: int = 0):
        if count <= 0:
            raise ValueError("Cannot navigate an empty entry sequence")
        self._count = count
        self._index = 0
        self.jump_to(index)

    @property
    def count(self) -> int:
        return self._count

    @property
    def index(self) -> int:
        return self._index

    def advance(self) -> int:
        self._index = (self._index + 1) % self._count
        return self._index

    def retreat(self) -> int:
        self._index = (self._index - 1 + self._count) % self._count
        return self._index

    def jump_to(self, index: int) -> int:
        """Move directly to `index`; raises IndexError when out of range."""
        if not 0 <= index < self._count:
            raise IndexError(f"Entry index {index} out of range [0, {self._count})")
        self._index = index
        return self._index
