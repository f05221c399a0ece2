"""
Fixed-rate timer arithmetic shared by the background prober and the client heartbeat.
"""

import math


def next_slot(slot: float, period: float, now: float) -> float:
    """
    Next start time on the grid ``slot + k * period`` (k >= 1).

    Grid points already behind *now* are skipped, so a run that overran its
    period starts at the next free slot instead of firing for every missed one.
    """
    slot += period
    if period > 0 and slot < now:
        slot += math.ceil((now - slot) / period) * period
    return slot
