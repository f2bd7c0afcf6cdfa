"""
Internal search package.

Product searches are answered by the hosted Doofinder API and reconciled
with the local catalogue: Doofinder decides which products match and in
which order, the local store restricts and paginates them. The blueprint in
`routes.py` exposes banner tracking and a status endpoint.
"""
from .config import InternalSearchConfig, is_enabled
from .guard import is_nested_search, nested_search
from .services import InternalSearch

__all__ = [
    "InternalSearch",
    "InternalSearchConfig",
    "is_enabled",
    "is_nested_search",
    "nested_search",
]
