# src/infraresize/watchers/base_watcher.py
"""
Shared plumbing for the watchers that block a resize phase until the
control plane reports the expected state.
"""

from abc import ABC

from ..core.config import config


class BaseWatcher(ABC):
    """
    Abstract base class for watchers. Subclasses poll one kind of resource
    on a fixed cadence with their own time budget.
    """

    def __init__(self, poll_interval: float = None, timeout: float = None):
        self.poll_interval = poll_interval if poll_interval is not None else config.POLL_INTERVAL_SECONDS
        self.timeout = timeout if timeout is not None else config.WAIT_TIMEOUT_SECONDS
