"""
Exceptions raised by asglik.
"""


class AsglikError(Exception):
    """
    Superclass of all exceptions raised by asglik.
    """


class InvalidParameterError(AsglikError, ValueError):
    """
    A model parameter or observed sample is outside its valid range.
    """


class EnumerationTooLargeError(AsglikError):
    """
    The number of internal lineages is too large to enumerate their types.

    Parameters
    ----------
    n_internal : int
        Number of internal lineages in the history
    limit : int
        Largest number of internal lineages the calculator will enumerate
    """

    def __init__(self, n_internal: int, limit: int):
        self.n_internal = n_internal
        self.limit = limit
        super().__init__(
            f"History has {n_internal} internal lineages; enumerating "
            f"2^{n_internal} type assignments exceeds the limit of {limit}"
        )


class InconsistentHistoryError(AsglikError, ValueError):
    """
    An event history is malformed.

    Raised when a replay meets an event that refers to a lineage which is
    not active at that point, or when event times are out of order.

    Parameters
    ----------
    message : str
        Description of the problem
    index : int, optional
        Position of the offending event in the history
    """

    def __init__(self, message: str, index=None):
        self.index = index
        if index is not None:
            message = f"Event {index}: {message}"
        super().__init__(message)
