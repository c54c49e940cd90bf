"""A deterministic counter used as a source of packet identifiers."""

from __future__ import annotations

from dataclasses import dataclass

_U16_MAX = 0xFFFF
_U32_MASK = 0xFFFF_FFFF


@dataclass
class CountingRng:
    """Counts upward from ``value``, wrapping to 1 after 65535."""

    value: int = 0

    def next_u64(self) -> int:
        self.value += 1
        if self.value > _U16_MAX:
            self.value = 1
        return self.value

    def next_u32(self) -> int:
        return self.next_u64() & _U32_MASK

    def fill_bytes(self, dest: bytearray | memoryview) -> None:
        """Fill ``dest`` in place with little-endian counter values."""
        view = memoryview(dest)
        whole = len(view) - len(view) % 8
        for start in range(0, whole, 8):
            view[start : start + 8] = self.next_u64().to_bytes(8, "little")
        rest = len(view) - whole
        if rest > 4:
            view[whole:] = self.next_u64().to_bytes(8, "little")[:rest]
        elif rest > 0:
            view[whole:] = self.next_u32().to_bytes(4, "little")[:rest]