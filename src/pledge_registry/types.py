# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from pledge_registry.errors import PledgeErrorCode, error_for_code

# ─── Currency ─────────────────────────────────────────────────────────────────

DEFAULT_CURRENCIES: tuple[str, ...] = ("STX", "USD", "BTC")

# ─── Call context ─────────────────────────────────────────────────────────────


class CallContext(BaseModel):
    """
    Ambient inputs supplied by the host for a single registry call.

    ``height`` is the current block height and ``caller`` the identity of the
    principal invoking the operation. Both are fixed for the duration of the
    call and never written by the registry.
    """

    model_config = ConfigDict(frozen=True)

    caller: str = Field(..., min_length=1)
    height: int = Field(..., ge=0)


# ─── Pledge ───────────────────────────────────────────────────────────────────


class Pledge(BaseModel):
    """Live state of one recurring pledge between a patron and a creator."""

    id: int = Field(..., ge=0)
    patron: str
    creator: str
    amount: int
    interval: int = Field(..., gt=0, description="Blocks between payments")
    start_block: int = Field(..., ge=0)
    duration: int = Field(..., gt=0, description="Maximum number of payments")
    payments_made: int = Field(default=0, ge=0)
    last_payment_block: int = Field(..., ge=0)
    active: bool = True
    currency: str
    grace_period: int = Field(..., ge=0)
    penalty_rate: int = Field(..., ge=0)
    perk_threshold: int = Field(..., gt=0)

    @property
    def remaining_payments(self) -> int:
        return max(0, self.duration - self.payments_made)


class PledgeUpdate(BaseModel):
    """Snapshot of the most recent parameter change applied to a pledge."""

    model_config = ConfigDict(frozen=True)

    pledge_id: int
    amount: int
    interval: int
    duration: int
    height: int
    updater: str


# ─── Transfer ─────────────────────────────────────────────────────────────────


class TransferInstruction(BaseModel):
    """
    An instruction for the escrow holder to move funds to a creator.

    The registry records instructions; it never moves funds itself.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    pledge_id: int
    amount: int
    currency: str
    source: str
    destination: str
    height: int


class TransferFilter(BaseModel):
    """Optional filter applied to transfer queries. All fields are AND-ed."""

    pledge_id: Optional[int] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    since_height: Optional[int] = None
    until_height: Optional[int] = None


# ─── Registry settings ────────────────────────────────────────────────────────


class RegistrySettings(BaseModel):
    """
    Live, mutable settings owned by one PledgeRegistry instance.

    ``next_pledge_id`` is both the id source for new pledges and the number of
    pledges ever created.
    """

    next_pledge_id: int = Field(default=0, ge=0)
    max_pledges: int = Field(..., ge=0)
    min_amount: int
    default_interval: int = Field(..., gt=0)
    accepted_currencies: tuple[str, ...]
    max_grace_period: int = Field(..., ge=0)
    max_penalty_rate: int = Field(..., ge=0)
    escrow_reference: Optional[str] = None
    authority_reference: Optional[str] = None


# ─── Result ───────────────────────────────────────────────────────────────────


class RegistryResult(BaseModel):
    """
    Outcome of a registry operation.

    Failed operations carry an ``error`` code and leave registry state
    untouched. ``value`` is the new pledge id for ``create_pledge`` and
    ``True`` for every other successful operation.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    value: Union[bool, int, None] = None
    error: Optional[PledgeErrorCode] = None

    @classmethod
    def success(cls, value: Union[bool, int] = True) -> RegistryResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, code: PledgeErrorCode) -> RegistryResult:
        return cls(ok=False, error=code)

    def unwrap(self) -> Union[bool, int, None]:
        """
        Return ``value`` on success.

        Raises the PledgeRegistryError subclass matching ``error`` on failure.
        """
        if self.ok:
            return self.value
        assert self.error is not None
        raise error_for_code(self.error)


# ─── Status ───────────────────────────────────────────────────────────────────


class PledgeStatus(BaseModel):
    """Point-in-time payment status of one pledge at a given height."""

    pledge_id: int
    active: bool
    payments_made: int
    remaining_payments: int
    next_due_block: int
    payment_due: bool
    height: int
