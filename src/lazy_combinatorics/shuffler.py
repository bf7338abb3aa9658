"""Keyed, constant-memory index shuffling.

:class:`IndexShuffler` is a bijection on ``[0, count)`` used by
:class:`~lazy_combinatorics.ranges.IndexRange` to visit indices in a
scattered order without storing a permutation table.  It is a
reversible scatter, good enough to avoid visibly sequential output,
**not** a uniformly random shuffle and not a cryptographic one.

Algorithm
---------
Let ``bits = (count − 1).bit_length()``, ``whole, rest = divmod(bits, 8)``
and write the index as ``ceil(bits / 8)`` big-endian bytes.

1. **Substitution with chaining.**  Bytes are consumed from the least
   significant end.  A running lookup value is updated as
   ``lookup ← byte ^ lookup`` and substituted through a fixed random
   byte table (four tables, used round-robin).  The substituted bytes
   are written from the most significant end, so byte order is
   reversed on the way.
2. **Remainder chunk.**  When ``rest > 0`` the top partial byte goes
   through a table of size ``2**rest`` (one table per width 1…7) and is
   left-aligned into the last output byte.
3. **Diffusion.**  Each output byte is XOR-ed with its successor,
   working from the end towards the front.
4. The result is read big-endian and shifted right by ``8 − rest``.

Every step is invertible, so the map is a permutation of
``[0, 2**bits)``.  Values that land in ``[count, 2**bits)`` are fed back
through the map (cycle-walking) until one falls below *count*; since
the map permutes a finite set containing ``[0, count)``, the walk
always ends inside it and the restriction stays a bijection.

Cost: ``O(log count)`` per call, no per-call state beyond locals, so a
single instance is safe to share between split ranges and threads.

The substitution tables come from ``numpy.random.default_rng(seed)``;
identical seeds give identical shuffles.
"""

from __future__ import annotations

import operator
from typing import Any

import numpy as np

from ._errors import ConfigurationError

BYTE_TABLE_COUNT = 4


class IndexShuffler:
    """Bijection on ``[0, count)`` determined by a seed.

    Args:
        count: Size of the index space.  Indices passed to
            :meth:`shuffle` must lie in ``[0, count)``.
        seed: Anything accepted by :func:`numpy.random.default_rng`
            (``None`` draws fresh OS entropy).

    Attributes:
        count: Size of the index space.
        byte_tables: Four read-only ``uint8`` permutations of ``0..255``.
        bit_tables: ``bit_tables[w]`` is a read-only permutation of
            ``0 .. 2**w - 1`` for ``w`` in ``1..7`` (index 0 unused).

    Raises:
        ConfigurationError: If *count* is negative.
    """

    def __init__(self, count: int, seed: Any = None) -> None:
        count = operator.index(count)
        if count < 0:
            raise ConfigurationError(f"count must be non-negative, got {count}")
        self.count = count
        rng = np.random.default_rng(seed)
        self.byte_tables = tuple(
            _frozen(rng.permutation(256).astype(np.uint8))
            for _ in range(BYTE_TABLE_COUNT)
        )
        self.bit_tables = (None,) + tuple(
            _frozen(rng.permutation(1 << width).astype(np.uint8))
            for width in range(1, 8)
        )

    def shuffle(self, index: Any) -> int:
        """Return the image of *index* under the shuffle.

        Raises:
            IndexError: If *index* is outside ``[0, count)``.
        """
        value = operator.index(index)
        if value < 0 or value >= self.count:
            raise IndexError(f"index {value} out of range for {self.count} indices")
        bit_count = (self.count - 1).bit_length()
        value = self._scatter(value, bit_count)
        while value >= self.count:
            value = self._scatter(value, bit_count)
        return value

    __call__ = shuffle

    def _scatter(self, value: int, bit_count: int) -> int:
        whole, rest = divmod(bit_count, 8)
        n_bytes = (bit_count + 7) // 8
        data = value.to_bytes(n_bytes, "big")
        out = bytearray(n_bytes)

        lookup = 0
        for i in range(whole):
            lookup = data[n_bytes - 1 - i] ^ lookup
            out[i] = int(self.byte_tables[i % BYTE_TABLE_COUNT][lookup])
        if rest:
            lookup = (data[0] ^ lookup) & ((1 << rest) - 1)
            out[n_bytes - 1] = (int(self.bit_tables[rest][lookup]) << (8 - rest)) & 0xFF

        for i in range(n_bytes - 2, -1, -1):
            out[i] ^= out[i + 1]

        scattered = int.from_bytes(out, "big")
        if rest:
            scattered >>= 8 - rest
        return scattered

    def __repr__(self) -> str:
        return f"IndexShuffler(count={self.count})"


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr
