"""
Context manager for map configuration (e.g., verification mode).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for verification mode
_verify_mode: ContextVar[bool] = ContextVar("verify_mode", default=False)


def is_verifying() -> bool:
    """Check if bijection verification is currently enabled."""
    return _verify_mode.get()


@contextmanager
def map_context(*, verify: bool = False):
    """
    Context manager for map configuration.

    Args:
        verify: If True, every mutating TwoWayMap operation re-checks the full
               bijection invariant afterwards and raises InvariantError on
               mismatch. Costs O(n) per mutation.

    Example:
        from twowaymap import TwoWayMap, map_context

        codes = TwoWayMap([(1, "one"), (2, "two")])

        # Normal - no extra checks
        codes.insert(3, "three")

        # Verified - each mutation is followed by a full consistency check
        with map_context(verify=True):
            codes.insert(1, "two")
    """
    token = _verify_mode.set(verify)
    try:
        yield
    finally:
        _verify_mode.reset(token)
