"""
kvawait-specific runtime exceptions.
"""

from __future__ import annotations

import typing as t


class WrapTargetTypeError(TypeError):
    """
    Raised when ``wrap`` receives something that is neither a registered
    library, a client, nor a transaction builder.

    Parameters
    ----------
    argument_name : str
        Name of the rejected argument.
    expected_type : str
        Nominal type the argument should have.
    value : typing.Any
        Rejected value.
    """

    def __init__(self, argument_name: str, expected_type: str, value: t.Any) -> None:
        self.argument_name = argument_name
        self.expected_type = expected_type
        self.received_type = type(value).__name__
        super().__init__(
            f'The "{argument_name}" argument must be of type {expected_type}. '
            f"Received type {self.received_type}"
        )


class CommandError(Exception):
    """
    Carry a non-exception error value reported by a command callback.

    The transport handed a truthy error that is not an exception, which
    cannot be raised as-is. The original value is kept on ``reason``.
    """

    def __init__(self, reason: t.Any) -> None:
        self.reason = reason
        super().__init__(str(object=reason))
