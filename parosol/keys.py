"""Octree (Morton) keys for voxel nodes.

A key interleaves the bits of the x, y and z coordinates: bit ``i`` of x goes
to bit ``3*i``, bit ``i`` of y to ``3*i + 1`` and bit ``i`` of z to
``3*i + 2``.  Only the lowest 16 bits of each coordinate are used.
"""

from __future__ import annotations

_COORD_MASK = 0xFFFFFFFF
_BITS = 16
_BYTE = 0xFF


def _coord(value: int) -> int:
    """Reduce a coordinate to the unsigned 32-bit range."""
    return int(value) & _COORD_MASK


def _spread_byte(value: int) -> int:
    """Move bit ``i`` of an 8-bit value to bit ``3*i``."""
    return sum(((value >> i) & 1) << (3 * i) for i in range(8))


class OctreeKeyLoop:
    """Compute octree keys one bit at a time."""

    def __call__(self, x: int, y: int, z: int) -> int:
        x, y, z = _coord(x), _coord(y), _coord(z)
        key = 0
        for i in range(_BITS):
            bit = 1 << i
            key |= (x & bit) << (2 * i)
            key |= (y & bit) << (2 * i + 1)
            key |= (z & bit) << (2 * i + 2)
        return key


class OctreeKeyLookup:
    """Compute octree keys through a byte lookup table.

    Besides the mapping itself it can step a key by one in any direction
    without decoding it.
    """

    def __init__(self) -> None:
        self.table: tuple[int, ...] = tuple(_spread_byte(v) for v in range(256))
        self.mask_x = self(0, _COORD_MASK, _COORD_MASK)
        self.mask_y = 1 + (self.mask_x << 1)
        self.mask_z = 3 + (self.mask_x << 2)

    def __call__(self, x: int, y: int, z: int) -> int:
        x, y, z = _coord(x), _coord(y), _coord(z)
        key = 0
        for i in range(2):
            shift = 24 * i
            key |= self.table[x & _BYTE] << shift
            key |= self.table[y & _BYTE] << (shift + 1)
            key |= self.table[z & _BYTE] << (shift + 2)
            x >>= 8
            y >>= 8
            z >>= 8
        return key

    @staticmethod
    def _increment(key: int, mask: int) -> int:
        stepped = (key | mask) + 1
        return (stepped & ~mask) | (key & mask)

    def inc_x(self, key: int) -> int:
        """Return the key of the node one step further in x."""
        return self._increment(key, self.mask_x)

    def inc_y(self, key: int) -> int:
        """Return the key of the node one step further in y."""
        return self._increment(key, self.mask_y)

    def inc_z(self, key: int) -> int:
        """Return the key of the node one step further in z."""
        return self._increment(key, self.mask_z)