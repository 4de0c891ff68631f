"""Base class for snapshot persistence.

The engine never performs fallible I/O itself; it hands a full snapshot to a
persistence collaborator after each change and asks it for the last saved
snapshot at startup. Following the adapter pattern used throughout, expected
failures are reported with simple return values (None/False) rather than
exceptions.
"""

from abc import ABC, abstractmethod

from restaurant_pos.models.snapshot_models import StoreSnapshot


class SnapshotStore(ABC):
    """Abstract base class for snapshot persistence backends.

    - load returns None when nothing was saved yet or the data is unreadable
    - save returns False on failure
    - Callers decide whether a failure matters
    """

    @abstractmethod
    def load(self) -> StoreSnapshot | None:
        """Return the most recently saved snapshot.

        Returns:
            StoreSnapshot: The saved snapshot, or None if there is none
        """
        pass

    @abstractmethod
    def save(self, snapshot: StoreSnapshot) -> bool:
        """Persist a full snapshot, replacing any previous one.

        Args:
            snapshot: State to save

        Returns:
            bool: True if the snapshot was saved, False otherwise
        """
        pass


class InMemorySnapshotStore(SnapshotStore):
    """Snapshot store that keeps the last snapshot in memory."""

    def __init__(self, initial: StoreSnapshot | None = None) -> None:
        self.snapshot = initial
        self.save_count = 0

    def load(self) -> StoreSnapshot | None:
        return self.snapshot

    def save(self, snapshot: StoreSnapshot) -> bool:
        self.snapshot = snapshot
        self.save_count += 1
        return True
