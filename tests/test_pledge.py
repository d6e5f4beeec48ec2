# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for the pure pledge helpers, transfer filtering, index rebuilding,
storage copies, configuration, and error codes.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import CREATOR, ESCROW, PATRON, at
from pledge_registry.config import RegistryConfig, build_settings
from pledge_registry.errors import (
    AuthorizationError,
    PledgeErrorCode,
    PledgeStateError,
    error_for_code,
)
from pledge_registry.pledge import (
    apply_cancellation,
    apply_payment,
    apply_update,
    build_pledge,
    check_payment,
    is_payment_due,
    next_due_block,
)
from pledge_registry.query import build_indexes, build_status, indexes_consistent
from pledge_registry.storage.memory import MemoryStorage
from pledge_registry.transfer import build_transfer, filter_transfers
from pledge_registry.types import CallContext, Pledge, RegistryResult, TransferFilter


def make_pledge(pledge_id: int = 0, **overrides: object) -> Pledge:
    pledge = build_pledge(
        pledge_id,
        at(0),
        creator=CREATOR,
        amount=100,
        interval=4320,
        start_block=0,
        duration=12,
        currency="STX",
        grace_period=7,
        penalty_rate=5,
        perk_threshold=50,
    )
    return pledge.model_copy(update=overrides)


# ---------------------------------------------------------------------------
# TestPledgeHelpers
# ---------------------------------------------------------------------------


class TestPledgeHelpers:
    def test_build_pledge_sets_initial_bookkeeping(self) -> None:
        pledge = build_pledge(
            3,
            at(5),
            creator=CREATOR,
            amount=100,
            interval=10,
            start_block=20,
            duration=4,
            currency="USD",
            grace_period=0,
            penalty_rate=0,
            perk_threshold=1,
        )
        assert pledge.id == 3
        assert pledge.patron == PATRON
        assert pledge.payments_made == 0
        assert pledge.last_payment_block == 20
        assert pledge.active is True

    def test_next_due_block(self) -> None:
        assert next_due_block(make_pledge(last_payment_block=100, interval=50)) == 150

    def test_is_payment_due_boundaries(self) -> None:
        pledge = make_pledge()
        assert is_payment_due(pledge, 4319) is False
        assert is_payment_due(pledge, 4320) is True

    def test_is_payment_due_false_when_inactive_or_exhausted(self) -> None:
        assert is_payment_due(make_pledge(active=False), 10_000) is False
        assert is_payment_due(make_pledge(payments_made=12), 100_000) is False

    def test_apply_payment_returns_new_copy(self) -> None:
        pledge = make_pledge()
        paid = apply_payment(pledge, at(4400))
        assert paid.payments_made == 1
        assert paid.last_payment_block == 4400
        assert pledge.payments_made == 0

    def test_apply_update_builds_snapshot(self) -> None:
        updated, snapshot = apply_update(make_pledge(), at(7, caller=PATRON), 300, 60, 2)
        assert (updated.amount, updated.interval, updated.duration) == (300, 60, 2)
        assert snapshot.pledge_id == 0
        assert snapshot.height == 7
        assert snapshot.updater == PATRON

    def test_apply_cancellation(self) -> None:
        assert apply_cancellation(make_pledge()).active is False

    def test_remaining_payments(self) -> None:
        assert make_pledge(payments_made=5).remaining_payments == 7

    def test_check_payment_requires_escrow(self) -> None:
        settings = build_settings()
        assert check_payment(make_pledge(), settings, at(4320)) == PledgeErrorCode.ESCROW_NOT_SET

    def test_check_payment_timing_precedes_escrow(self) -> None:
        settings = build_settings()
        assert check_payment(make_pledge(), settings, at(1)) == PledgeErrorCode.PAYMENT_NOT_DUE


# ---------------------------------------------------------------------------
# TestTransfers
# ---------------------------------------------------------------------------


class TestTransfers:
    def test_build_transfer_flows_from_escrow_to_creator(self) -> None:
        transfer = build_transfer(0, make_pledge(), ESCROW, 4320)
        assert transfer.source == ESCROW
        assert transfer.destination == CREATOR
        assert transfer.amount == 100

    def test_filter_none_returns_copy(self) -> None:
        transfers = [build_transfer(0, make_pledge(), ESCROW, 4320)]
        result = filter_transfers(transfers, None)
        assert result == transfers
        assert result is not transfers

    def test_filter_fields_are_anded(self) -> None:
        transfers = [
            build_transfer(0, make_pledge(0), ESCROW, 100),
            build_transfer(1, make_pledge(1, creator="STOTHER"), ESCROW, 200),
            build_transfer(2, make_pledge(0), ESCROW, 300),
        ]
        result = filter_transfers(
            transfers, TransferFilter(destination=CREATOR, until_height=250)
        )
        assert [t.index for t in result] == [0]


# ---------------------------------------------------------------------------
# TestIndexes
# ---------------------------------------------------------------------------


class TestIndexes:
    def test_build_indexes_in_creation_order(self) -> None:
        pledges = [
            make_pledge(1, creator="STOTHER"),
            make_pledge(0),
            make_pledge(2, patron="ST2PATRON"),
        ]
        by_patron, by_creator = build_indexes(pledges)
        assert by_patron == {PATRON: [0, 1], "ST2PATRON": [2]}
        assert by_creator == {CREATOR: [0, 2], "STOTHER": [1]}

    def test_indexes_consistent_detects_drift(self) -> None:
        storage = MemoryStorage()
        pledge = make_pledge()
        storage.save_pledge(pledge)
        storage.append_patron_index(pledge.patron, pledge.id)
        assert indexes_consistent(storage) is False
        storage.append_creator_index(pledge.creator, pledge.id)
        assert indexes_consistent(storage) is True

    def test_build_status(self) -> None:
        status = build_status(make_pledge(payments_made=2, last_payment_block=8640), 9000)
        assert status.next_due_block == 12_960
        assert status.payment_due is False
        assert status.remaining_payments == 10


# ---------------------------------------------------------------------------
# TestMemoryStorage
# ---------------------------------------------------------------------------


class TestMemoryStorage:
    def test_saved_pledge_is_isolated_from_caller(self) -> None:
        storage = MemoryStorage()
        pledge = make_pledge()
        storage.save_pledge(pledge)
        pledge.amount = 1
        stored = storage.get_pledge(0)
        assert stored is not None
        assert stored.amount == 100

    def test_index_lists_are_copies(self) -> None:
        storage = MemoryStorage()
        storage.append_patron_index(PATRON, 0)
        storage.list_by_patron(PATRON).append(99)
        assert storage.list_by_patron(PATRON) == [0]

    def test_unknown_keys(self) -> None:
        storage = MemoryStorage()
        assert storage.get_pledge(0) is None
        assert storage.get_update(0) is None
        assert storage.list_by_creator(CREATOR) == []


# ---------------------------------------------------------------------------
# TestConfigAndContext
# ---------------------------------------------------------------------------


class TestConfigAndContext:
    def test_config_is_frozen(self) -> None:
        config = RegistryConfig()
        with pytest.raises(ValidationError):
            config.min_amount = 1  # type: ignore[misc]

    def test_config_rejects_non_positive_default_interval(self) -> None:
        with pytest.raises(ValidationError):
            RegistryConfig(default_interval=0)

    def test_config_rejects_empty_currency_set(self) -> None:
        with pytest.raises(ValidationError):
            RegistryConfig(accepted_currencies=())

    def test_context_rejects_negative_height(self) -> None:
        with pytest.raises(ValidationError):
            CallContext(caller=PATRON, height=-1)

    def test_context_rejects_empty_caller(self) -> None:
        with pytest.raises(ValidationError):
            CallContext(caller="", height=0)


# ---------------------------------------------------------------------------
# TestErrorCodes
# ---------------------------------------------------------------------------


class TestErrorCodes:
    def test_codes_keep_their_numeric_values(self) -> None:
        assert PledgeErrorCode.NOT_AUTHORIZED == 100
        assert PledgeErrorCode.PAYMENT_NOT_DUE == 109
        assert PledgeErrorCode.INVALID_CREATOR == 110
        assert PledgeErrorCode.ESCROW_NOT_SET == 114
        assert PledgeErrorCode.AUTHORITY_NOT_VERIFIED == 120

    def test_every_code_has_an_exception_and_description(self) -> None:
        for code in PledgeErrorCode:
            error = error_for_code(code)
            assert error.code is code
            assert error.message == code.describe()

    def test_error_classes(self) -> None:
        assert isinstance(error_for_code(PledgeErrorCode.NOT_AUTHORIZED), AuthorizationError)
        assert isinstance(error_for_code(PledgeErrorCode.PLEDGE_NOT_FOUND), PledgeStateError)

    def test_success_result_unwraps_value(self) -> None:
        assert RegistryResult.success(7).unwrap() == 7
        assert RegistryResult.success().value is True
