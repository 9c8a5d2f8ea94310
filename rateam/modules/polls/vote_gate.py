"""Thread-safe per-(poll, user) locks so vote submissions from one user never interleave."""
import threading
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_registry: dict[tuple[str, str], list] = {}  # key -> [lock, holders]


@contextmanager
def single_flight(poll_id: str, user_id: str):
    """Serialize submissions for one (poll, user) pair within this process."""
    key = (poll_id, user_id)
    with _lock:
        entry = _registry.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _lock:
            entry[1] -= 1
            if entry[1] == 0:
                _registry.pop(key, None)


def active_keys() -> int:
    with _lock:
        return len(_registry)
