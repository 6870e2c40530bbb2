"""Candidate sets: 9-bit masks where bit (d - 1) means digit d is still possible."""

from typing import Iterable, List, Optional

ALL_CANDIDATES = 0x1FF
BLANKED = 0

DIGITS = range(1, 10)


def _check_digit(digit: int) -> None:
    if not 1 <= digit <= 9:
        raise ValueError(f"Digit must be in 1..9, got {digit!r}")


def add(candidates: int, digit: int) -> int:
    _check_digit(digit)
    return candidates | (1 << (digit - 1))


def contains(candidates: int, digit: int) -> bool:
    _check_digit(digit)
    return bool(candidates & (1 << (digit - 1)))


def popcount(candidates: int) -> int:
    return (candidates & ALL_CANDIDATES).bit_count()


def is_unique(candidates: int) -> bool:
    """True when exactly one digit remains, i.e. the cell is resolved."""
    return popcount(candidates) == 1


def next_candidate(candidates: int, previous: int) -> Optional[int]:
    """
    Smallest digit greater than `previous` present in the set, or None.
    `previous` does not need to be in the set; pass 0 to start from the beginning.
    """
    for digit in range(max(previous, 0) + 1, 10):
        if candidates & (1 << (digit - 1)):
            return digit
    return None


def digit_of(candidates: int) -> Optional[int]:
    if not is_unique(candidates):
        return None
    return next_candidate(candidates, 0)


def from_digits(digits: Iterable[int]) -> int:
    result = BLANKED
    for digit in digits:
        result = add(result, digit)
    return result


def candidates_of(candidates: int) -> List[int]:
    return [d for d in DIGITS if candidates & (1 << (d - 1))]
