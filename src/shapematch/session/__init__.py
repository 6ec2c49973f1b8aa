"""
Interactive query session and its recompute scheduler.

Usage:
    from shapematch.dataset import load_dataset
    from shapematch.session import QuerySession

    session = QuerySession(load_dataset("shapes.csv"), top_n=5)
    session.subscribe(render)
    session.set_axis(2, 0.9)   # slider moved; recompute is throttled
"""

from .scheduler import UpdateScheduler, event_loop_call_later
from .state import QuerySession

__all__ = ["QuerySession", "UpdateScheduler", "event_loop_call_later"]
