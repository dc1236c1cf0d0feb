"""
Exceptions that are used throughout
"""

from __future__ import annotations

from typing import Any


class InputContractError(TypeError):
    """
    Raised when the top-level inputs do not have the expected structure

    Individual malformed cells are never an error
    (they are parsed leniently),
    but a ledger which is not a sequence of records is.
    """

    def __init__(self, name: str, expected: str, received: Any) -> None:
        """
        Initialise the error

        Parameters
        ----------
        name
            Name of the offending input

        expected
            Description of what we expected

        received
            What we actually received
        """
        error_msg = (
            f"`{name}` must be {expected}. "
            f"Received {type(received).__name__}: {received!r}"
        )
        super().__init__(error_msg)


class NotConsistentError(AssertionError):
    """
    Raised when a summary breaks one of its invariants
    """

    def __init__(self, what: str, offending: Any) -> None:
        """
        Initialise the error

        Parameters
        ----------
        what
            Description of the invariant that does not hold

        offending
            The entries (or keys) that break it
        """
        error_msg = f"{what}. offending=\n{offending}"
        super().__init__(error_msg)
