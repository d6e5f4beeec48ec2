# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from enum import IntEnum


class PledgeErrorCode(IntEnum):
    """
    Discrete result codes returned by every failing registry operation.

    The numeric values are stable and shared with existing registry clients.
    Gaps in the numbering belong to codes that no operation emits.
    """

    NOT_AUTHORIZED = 100
    INVALID_AMOUNT = 101
    INVALID_INTERVAL = 102
    INVALID_DURATION = 103
    INVALID_START_BLOCK = 104
    PLEDGE_NOT_FOUND = 106
    PLEDGE_INACTIVE = 107
    PAYMENT_NOT_DUE = 109
    INVALID_CREATOR = 110
    MAX_PLEDGES_EXCEEDED = 112
    ESCROW_NOT_SET = 114
    INVALID_PERK_THRESHOLD = 115
    INVALID_CURRENCY = 116
    INVALID_GRACE_PERIOD = 118
    INVALID_PENALTY = 119
    AUTHORITY_NOT_VERIFIED = 120

    def describe(self) -> str:
        """Return a human-readable description of this code."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[PledgeErrorCode, str] = {
    PledgeErrorCode.NOT_AUTHORIZED: "Caller is not the patron of this pledge.",
    PledgeErrorCode.INVALID_AMOUNT: "Amount is below the registry minimum.",
    PledgeErrorCode.INVALID_INTERVAL: "Interval must be a positive number of blocks.",
    PledgeErrorCode.INVALID_DURATION: "Duration must be a positive number of payments.",
    PledgeErrorCode.INVALID_START_BLOCK: "Start block lies before the current height.",
    PledgeErrorCode.PLEDGE_NOT_FOUND: "No pledge exists with this id.",
    PledgeErrorCode.PLEDGE_INACTIVE: "Pledge has been cancelled.",
    PledgeErrorCode.PAYMENT_NOT_DUE: "No payment is due for this pledge at the current height.",
    PledgeErrorCode.INVALID_CREATOR: "Creator must differ from the patron.",
    PledgeErrorCode.MAX_PLEDGES_EXCEEDED: "Registry has reached its pledge capacity.",
    PledgeErrorCode.ESCROW_NOT_SET: "No escrow reference has been configured.",
    PledgeErrorCode.INVALID_PERK_THRESHOLD: "Perk threshold must be positive.",
    PledgeErrorCode.INVALID_CURRENCY: "Currency is not in the accepted set.",
    PledgeErrorCode.INVALID_GRACE_PERIOD: "Grace period is out of range.",
    PledgeErrorCode.INVALID_PENALTY: "Penalty rate is out of range.",
    PledgeErrorCode.AUTHORITY_NOT_VERIFIED: "No authority reference has been configured.",
}


class PledgeRegistryError(Exception):
    """Base class for all pledge-registry errors."""

    def __init__(self, code: PledgeErrorCode, message: str | None = None) -> None:
        self.code = code
        self.message = message or code.describe()
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.name}, message={self.message!r})"


class AuthorizationError(PledgeRegistryError):
    """Raised when the caller may not perform the requested change."""


class PledgeValidationError(PledgeRegistryError):
    """Raised when an input parameter is out of range or malformed."""


class PledgeStateError(PledgeRegistryError):
    """
    Raised when the pledge or registry is in the wrong state for the call.

    Covers missing and cancelled pledges, payments that are not yet due (or
    whose quota is exhausted), and a registry at capacity.
    """


class RegistryConfigurationError(PledgeRegistryError):
    """Raised when a required collaborator reference has not been set."""


_ERROR_CLASSES: dict[PledgeErrorCode, type[PledgeRegistryError]] = {
    PledgeErrorCode.NOT_AUTHORIZED: AuthorizationError,
    PledgeErrorCode.AUTHORITY_NOT_VERIFIED: AuthorizationError,
    PledgeErrorCode.INVALID_AMOUNT: PledgeValidationError,
    PledgeErrorCode.INVALID_INTERVAL: PledgeValidationError,
    PledgeErrorCode.INVALID_DURATION: PledgeValidationError,
    PledgeErrorCode.INVALID_START_BLOCK: PledgeValidationError,
    PledgeErrorCode.INVALID_CREATOR: PledgeValidationError,
    PledgeErrorCode.INVALID_PERK_THRESHOLD: PledgeValidationError,
    PledgeErrorCode.INVALID_CURRENCY: PledgeValidationError,
    PledgeErrorCode.INVALID_GRACE_PERIOD: PledgeValidationError,
    PledgeErrorCode.INVALID_PENALTY: PledgeValidationError,
    PledgeErrorCode.PLEDGE_NOT_FOUND: PledgeStateError,
    PledgeErrorCode.PLEDGE_INACTIVE: PledgeStateError,
    PledgeErrorCode.PAYMENT_NOT_DUE: PledgeStateError,
    PledgeErrorCode.MAX_PLEDGES_EXCEEDED: PledgeStateError,
    PledgeErrorCode.ESCROW_NOT_SET: RegistryConfigurationError,
}


def error_for_code(code: PledgeErrorCode) -> PledgeRegistryError:
    """Build the exception that corresponds to ``code``."""
    return _ERROR_CLASSES[code](code)
