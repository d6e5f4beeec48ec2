# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
basic_pledge.py

Demonstrates the pledge lifecycle against a simulated block height:
  1. Configure the escrow reference.
  2. Create a monthly pledge.
  3. Walk the height forward and execute payments as they fall due.
  4. Cancel the pledge and inspect the transfer log.

Run with:  python examples/basic_pledge.py
(with pledge-registry installed)
"""

import logging

from pledge_registry import CallContext, PledgeRegistry, TransferFilter

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

# ─── Setup ────────────────────────────────────────────────────────────────────

registry = PledgeRegistry()
registry.set_escrow_reference(CallContext(caller="admin", height=0), "escrow-holder")

pledge_id = registry.create_pledge(
    CallContext(caller="alice", height=0),
    creator="bob",
    amount=100,
    interval=None,  # registry default: 4320 blocks
    start_block=0,
    duration=3,
    currency="STX",
    grace_period=7,
    penalty_rate=5,
    perk_threshold=50,
).unwrap()

# ─── Walk the chain forward ───────────────────────────────────────────────────

for height in range(0, 20_000, 1_000):
    keeper = CallContext(caller="keeper", height=height)
    result = registry.execute_payment(keeper, pledge_id)
    if result.ok:
        pledge = registry.get_pledge(pledge_id)
        assert pledge is not None
        print(
            f"height {height:>6}: PAID   payments_made={pledge.payments_made}  "
            f"next_due={registry.next_payment_block(pledge_id)}"
        )
    else:
        assert result.error is not None
        print(f"height {height:>6}: SKIP   reason={result.error.name}")

# ─── Cancel and summarise ─────────────────────────────────────────────────────

registry.cancel_pledge(CallContext(caller="alice", height=20_000), pledge_id)

transfers = registry.get_transfers(TransferFilter(pledge_id=pledge_id))
print(f"\n{len(transfers)} transfers recorded:")
for transfer in transfers:
    print(
        f"  [{transfer.index}] {transfer.amount} {transfer.currency}  "
        f"{transfer.source} -> {transfer.destination}  at {transfer.height}"
    )
