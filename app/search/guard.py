"""
Re-entrancy guard for internal search.

The reconciled product query goes through the same service method that
triggers internal search in the first place. The flag below tells that
method it is running inside a reconciliation and must behave natively.

The flag lives in a ContextVar, so each thread, greenlet or asyncio task
handling a request sees its own value.
"""
from contextlib import contextmanager
from contextvars import ContextVar

_skip_nested_search: ContextVar[bool] = ContextVar(
    "skip_nested_search", default=False
)


def is_nested_search() -> bool:
    return _skip_nested_search.get()


@contextmanager
def nested_search():
    """Mark the enclosed block as a nested search; always resets on exit."""
    token = _skip_nested_search.set(True)
    try:
        yield
    finally:
        _skip_nested_search.reset(token)
