"""Derivable error chains with a compact one-line rendering.

    ErrNotFound = errchain.new("store").wrap("not found")
    err = ErrNotFound.wrap_cause("load user", OSError("disk"))
    str(err)                 # "store: not found > load user < disk"
    err.is_(ErrNotFound)     # True
"""
from errchain.core.chain import ErrorChain, new, new_template
from errchain.core.wrap import WrappedError, is_error, unwrap_error, wrap_message, wrap_with_cause

__all__ = [
    "ErrorChain",
    "WrappedError",
    "is_error",
    "new",
    "new_template",
    "unwrap_error",
    "wrap_message",
    "wrap_with_cause",
]
