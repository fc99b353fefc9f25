"""
Exceptions raised by the alignment and reactor engines.

A pair of reports that does not overlap is not an error: the solver returns
None for it. Only malformed input, unreachable scanners and exhausted search
budgets raise.
"""


class BeaconAlignError(Exception):
    """Base class for beacon_align errors."""


class MalformedInputError(BeaconAlignError, ValueError):
    """Input has the wrong arity, non-integer fields or inverted ranges."""


class AlignmentError(BeaconAlignError):
    """Some scanners could not be connected to the reference scanner."""

    def __init__(self, unreachable):
        self.unreachable = sorted(unreachable)
        super().__init__(f"Could not align scanners: {self.unreachable}")


class SearchExhausted(BeaconAlignError):
    """A search grew past its node budget."""

    def __init__(self, budget: int):
        self.budget = budget
        super().__init__(f"Search exceeded node budget of {budget}")
