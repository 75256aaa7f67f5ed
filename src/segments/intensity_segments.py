# intensity_segments.py
"""
Piecewise-constant intensity over the number line.

The structure stores breakpoints [[x, v], ...] sorted by coordinate:
the intensity at x is the value of the greatest breakpoint <= x,
0 before the first one.

Mutators:
- add(from_, to, amount): accumulate amount over [from_, to)
- set(from_, to, amount): overwrite [from_, to) with amount

Both leave the breakpoints in canonical form (see _merge_keys).
"""

from typing import Iterator, List, Optional, Tuple

from sortedcontainers import SortedDict

from shared.logger import log_invalid_range, log_mutation


def _format_number(x) -> str:
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return str(x)


class InvalidRangeError(ValueError):
    """Raised when a range does not satisfy from_ < to."""

    def __init__(self, operation: str, from_, to):
        self.operation = operation
        self.from_ = from_
        self.to = to
        super().__init__(
            f"{operation}: range non valido [{from_}, {to}), "
            f"serve from_ < to"
        )


class IntensitySegments:
    """
    Intensity step function built from incremental range updates.

    Examples:
        segments = IntensitySegments()
        segments.add(10, 30, 1)
        segments.add(20, 40, 1)
        str(segments) → '[[10,1],[20,2],[30,1],[40,0]]'

        segments.set(20, 40, 0)
        str(segments) → '[[10,1],[20,0]]'
    """

    def __init__(self):
        # coordinate → intensity from that coordinate up to the next key
        self._segments: SortedDict = SortedDict()

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def add(self, from_, to, amount) -> None:
        """
        Add amount to the intensity over [from_, to).

        Args:
            from_: start of the range (included)
            to: end of the range (excluded)
            amount: increment, may be negative

        Raises:
            InvalidRangeError: if not from_ < to
        """
        self._validate_range('add', from_, to)

        # Nessuna sovrapposizione: equivale ad assegnare il range
        if (not self._segments
                or to < self._segments.peekitem(0)[0]
                or from_ > self._segments.peekitem(-1)[0]):
            self._assign(from_, to, amount)
        else:
            self._insert_stop(to)
            self._insert_stop(from_)

            for key in list(self._segments.irange(from_, to, inclusive=(True, False))):
                self._segments[key] += amount

            self._merge_keys()

        log_mutation('add', from_, to, amount, len(self._segments))

    def set(self, from_, to, amount) -> None:
        """
        Overwrite the intensity over [from_, to) with amount.

        Whatever was there before is discarded; outside the range
        the function does not change.

        Raises:
            InvalidRangeError: if not from_ < to
        """
        self._validate_range('set', from_, to)
        self._assign(from_, to, amount)
        log_mutation('set', from_, to, amount, len(self._segments))

    def _assign(self, from_, to, amount) -> None:
        # Il valore dopo 'to' deve restare quello pre-mutazione
        self._insert_stop(to)
        self._segments[from_] = amount

        inner = list(self._segments.irange(from_, to, inclusive=(False, False)))
        for key in inner:
            del self._segments[key]

        self._merge_keys()

    # =========================================================================
    # SERIALIZZAZIONE
    # =========================================================================

    def to_string(self) -> str:
        """
        Dump breakpoints as '[[k1,v1],[k2,v2],...]' ('[]' when empty).

        10 and 10.0 are the same key: integral floats are printed as
        integers so the output does not depend on insertion order.
        """
        items = [
            f"[{_format_number(key)},{_format_number(value)}]"
            for key, value in self._segments.items()
        ]
        return f"[{','.join(items)}]"

    @property
    def breakpoints(self) -> List[list]:
        """Copy of the breakpoints as [[x, v], ...] in ascending x."""
        return [[key, value] for key, value in self._segments.items()]

    def __iter__(self) -> Iterator[Tuple]:
        return iter(list(self._segments.items()))

    def __len__(self) -> int:
        return len(self._segments)

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self):
        return f"{self.__class__.__name__}({self.breakpoints})"

    # =========================================================================
    # HELPERS INTERNI
    # =========================================================================

    def _validate_range(self, operation: str, from_, to) -> None:
        # 'not <' rifiuta anche i NaN
        if not from_ < to:
            log_invalid_range(operation, from_, to, len(self._segments))
            raise InvalidRangeError(operation, from_, to)

    def _left_key(self, x) -> Optional[object]:
        """
        Predecessor lookup: greatest key strictly less than x.

        Returns:
            the key, or None if the map is empty or x <= every key
        """
        idx = self._segments.bisect_left(x) - 1
        if idx < 0:
            return None
        return self._segments.peekitem(idx)[0]

    def _value_before(self, x):
        """Intensity in effect immediately before x (0 if none)."""
        left = self._left_key(x)
        return 0 if left is None else self._segments[left]

    def _insert_stop(self, x) -> None:
        """
        Ensure a breakpoint exists at x without changing the function.

        A new breakpoint copies the value carried from its predecessor.
        """
        if x not in self._segments:
            self._segments[x] = self._value_before(x)

    def _merge_keys(self) -> None:
        """
        Restore canonical form.

        Forward pass with an implicit previous value of 0: a breakpoint
        whose value equals the previous kept one is redundant.
        This strips leading zeros, collapses zero runs to one
        and equal runs to their leftmost breakpoint.
        """
        previous = 0
        redundant = []
        for key, value in self._segments.items():
            if value == previous:
                redundant.append(key)
            else:
                previous = value

        for key in redundant:
            del self._segments[key]
