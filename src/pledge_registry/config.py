# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from pledge_registry.types import DEFAULT_CURRENCIES, RegistrySettings


class RegistryConfig(BaseModel, frozen=True):
    """
    Construction-time configuration for a PledgeRegistry.

    All fields are optional. Values here seed the registry's live
    :class:`~pledge_registry.types.RegistrySettings`; afterwards the settings
    change only through the registry's explicit setters.

    Attributes:
        max_pledges: Ceiling on the number of pledges ever created.
        min_amount: Floor enforced on pledge amounts at creation and update.
        default_interval: Interval (in blocks) used when ``create_pledge`` is
            called without one. 4320 blocks is roughly thirty days.
        accepted_currencies: Denominations a pledge may be created in.
        max_grace_period: Upper bound on a pledge's grace period.
        max_penalty_rate: Upper bound on a pledge's penalty percentage.
        escrow_reference: Optional escrow holder identity set up front.
        authority_reference: Optional authority identity set up front.

    Example::

        config = RegistryConfig(max_pledges=500, min_amount=25)
        registry = PledgeRegistry(config=config)
    """

    max_pledges: Annotated[int, Field(ge=0)] = 10_000
    min_amount: int = 10
    default_interval: Annotated[int, Field(gt=0)] = 4320
    accepted_currencies: tuple[str, ...] = DEFAULT_CURRENCIES
    max_grace_period: Annotated[int, Field(ge=0)] = 30
    max_penalty_rate: Annotated[int, Field(ge=0)] = 100
    escrow_reference: str | None = None
    authority_reference: str | None = None

    @field_validator("accepted_currencies")
    @classmethod
    def currencies_must_not_be_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("accepted_currencies must contain at least one currency")
        return value


def build_settings(config: RegistryConfig | None = None) -> RegistrySettings:
    """Derive fresh live settings from an optional RegistryConfig."""
    if config is None:
        config = RegistryConfig()

    return RegistrySettings(
        next_pledge_id=0,
        max_pledges=config.max_pledges,
        min_amount=config.min_amount,
        default_interval=config.default_interval,
        accepted_currencies=config.accepted_currencies,
        max_grace_period=config.max_grace_period,
        max_penalty_rate=config.max_penalty_rate,
        escrow_reference=config.escrow_reference,
        authority_reference=config.authority_reference,
    )
