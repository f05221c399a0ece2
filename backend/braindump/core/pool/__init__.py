"""
Storage pool resilience: probing, reconnection with backoff, keep-alive ticks.
"""

from .manager import PoolManager
from .prober import BackgroundProber
from .supervisor import ReconnectSupervisor, SupervisorPhase, backoff_delay

__all__ = [
    "BackgroundProber",
    "PoolManager",
    "ReconnectSupervisor",
    "SupervisorPhase",
    "backoff_delay",
]
