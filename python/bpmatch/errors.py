"""
Exceptions raised by the matching algorithms.
"""


class MatchingError(Exception):
    """Raised when verification of a matching fails.

    This can only happen if there is a bug in the algorithm.
    """
    pass
