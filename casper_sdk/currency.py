"""Native token units and their conversion."""

from __future__ import annotations

from decimal import Decimal

SYMBOL = "CSPR"

MOTES_TO_CSPR_RATE = Decimal(1_000_000_000)


def motes_to_cspr(motes: int | None) -> Decimal:
    """Convert an amount in motes to CSPR; ``None`` counts as zero."""
    if motes is None:
        return Decimal(0)
    if motes < 0:
        raise ValueError(f"motes amount cannot be negative: {motes}")
    return Decimal(motes) / MOTES_TO_CSPR_RATE