# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for pledge-registry tests."""

from __future__ import annotations

from typing import Any

import pytest

from pledge_registry.registry import PledgeRegistry
from pledge_registry.types import CallContext, RegistryResult

PATRON = "ST1PATRON"
CREATOR = "STCREATOR"
ESCROW = "STESCROW"
AUTHORITY = "STAUTHORITY"


def at(height: int, caller: str = PATRON) -> CallContext:
    """Build a CallContext for ``caller`` at ``height``."""
    return CallContext(caller=caller, height=height)


def create_default_pledge(
    registry: PledgeRegistry,
    context: CallContext | None = None,
    **overrides: Any,
) -> RegistryResult:
    """Create the standard 100 STX / 4320-block / 12-payment pledge."""
    params: dict[str, Any] = {
        "creator": CREATOR,
        "amount": 100,
        "interval": 4320,
        "start_block": 0,
        "duration": 12,
        "currency": "STX",
        "grace_period": 7,
        "penalty_rate": 5,
        "perk_threshold": 50,
    }
    params.update(overrides)
    return registry.create_pledge(context or at(0), **params)


@pytest.fixture
def registry() -> PledgeRegistry:
    """A freshly initialised PledgeRegistry with default config."""
    return PledgeRegistry()


@pytest.fixture
def escrowed_registry(registry: PledgeRegistry) -> PledgeRegistry:
    """A registry with the escrow reference already configured."""
    registry.set_escrow_reference(at(0), ESCROW)
    return registry


@pytest.fixture
def pledged_registry(escrowed_registry: PledgeRegistry) -> PledgeRegistry:
    """A registry holding pledge 0 from PATRON to CREATOR."""
    assert create_default_pledge(escrowed_registry).ok
    return escrowed_registry
