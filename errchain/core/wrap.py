from __future__ import annotations

from typing import Any, Optional


class WrappedError(Exception):
    """Plain error that prefixes a message with the error it wraps.

    Returned by wrap_message and wrap_with_cause; unwrap() gives back err.
    """

    def __init__(self, err: Any, text: str) -> None:
        super().__init__(err, text)
        self.err = err
        self.text = text
        if isinstance(err, BaseException):
            self.__cause__ = err

    def __str__(self) -> str:
        return self.text

    def unwrap(self) -> Any:
        return self.err


def wrap_message(err: Any, message: str) -> Optional[Any]:
    """Wrap err with a message.

    Returns None if err is None and err itself if message is empty.
    """
    if err is None:
        return None
    if not message:
        return err
    return WrappedError(err, f"{err}: {message}")


def wrap_with_cause(err: Any, cause: Any, message: str) -> Optional[Any]:
    """Wrap err with a message and append the cause.

    Without a cause this is wrap_message. Unwraps to err in every case.
    """
    if err is None:
        return None
    if cause is None:
        return wrap_message(err, message)
    if not message:
        return WrappedError(err, f"{err}: {cause}")
    return WrappedError(err, f"{err}: {message}: {cause}")


def unwrap_error(err: Any) -> Optional[Any]:
    """Single unwrap step: err.unwrap() when available, else __cause__."""
    unwrap = getattr(err, "unwrap", None)
    if callable(unwrap):
        return unwrap()
    return getattr(err, "__cause__", None)


def is_error(err: Any, target: Any) -> bool:
    """Report whether err or anything it unwraps to matches target.

    A match is the same object, or an instance of target when target is an
    exception class. Errors with their own is_() decide for their subtree.
    """
    if err is None or target is None:
        return err is target

    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        if err is target:
            return True
        if isinstance(target, type) and isinstance(err, target):
            return True
        matcher = getattr(err, "is_", None)
        if callable(matcher):
            return bool(matcher(target))
        err = unwrap_error(err)
    return False
