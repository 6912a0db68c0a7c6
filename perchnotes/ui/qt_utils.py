from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def blocked_signals(obj):
    """
    Temporarily block Qt signals of `obj` and always unblock them again.
    """
    if obj is None:
        yield
        return
    previous = obj.blockSignals(True)
    try:
        yield
    finally:
        try:
            obj.blockSignals(previous)
        except RuntimeError:
            # the C++ object may already be gone
            pass
