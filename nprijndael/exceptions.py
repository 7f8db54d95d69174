# -*- coding: utf-8 -*-

"""Exceptions raised by nprijndael.

All of them derive from `RijndaelError`, which is itself a `ValueError`,
so callers that only care about "bad input" can catch the latter.
"""

__all__ = (
    "RijndaelError",
    "InvalidKeySize",
    "InvalidBlockLength",
    "OffsetOutOfRange",
    "ScheduleRoundCountMismatch",
)


class RijndaelError(ValueError):
    """Base class for all nprijndael errors."""


class InvalidKeySize(RijndaelError):
    """Raw key length is not one of 16, 24, or 32 bytes."""

    def __init__(self, length):
        self.length = length
        super().__init__(
            "key must be 16, 24, or 32 bytes long, got %d" % length
        )


class InvalidBlockLength(RijndaelError):
    """Input block is not exactly 16 bytes."""

    def __init__(self, length):
        self.length = length
        super().__init__("block must be 16 bytes long, got %d" % length)


class OffsetOutOfRange(RijndaelError):
    """A window of `length` bytes at `offset` does not fit the buffer."""

    def __init__(self, offset, length, capacity):
        self.offset = offset
        self.length = length
        self.capacity = capacity
        super().__init__(
            "cannot access %d bytes at offset %d of a %d-byte buffer"
            % (length, offset, capacity)
        )


class ScheduleRoundCountMismatch(RijndaelError):
    """Round count does not pair with the schedule it was given with."""

    def __init__(self, rounds, nwords):
        self.rounds = rounds
        self.nwords = nwords
        super().__init__(
            "round count %r does not match a %d-word schedule"
            % (rounds, nwords)
        )
