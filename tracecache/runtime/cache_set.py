from __future__ import annotations
from typing import List, Optional


class CacheLine:
    """A single line slot: valid bit, tag and replacement age."""
    def __init__(self):
        self.valid = False
        self.tag = 0
        self.age = 0

    def __repr__(self) -> str:
        return f"CacheLine(valid={self.valid}, tag={self.tag:#x}, age={self.age})"


class CacheSet:
    """A fixed number of line slots, scanned in slot order."""
    def __init__(self, associativity: int):
        self.lines: List[CacheLine] = [CacheLine() for _ in range(associativity)]

    def find(self, tag: int) -> Optional[int]:
        """Returns the way holding `tag`, or None on a miss."""
        for way, line in enumerate(self.lines):
            if line.valid and line.tag == tag:
                return way
        return None

    def valid_tags(self) -> List[int]:
        return [line.tag for line in self.lines if line.valid]
