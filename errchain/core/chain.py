from __future__ import annotations

from typing import Any, Optional

from errchain.core.formatting import format_args, join_args
from errchain.core.wrap import is_error


class ErrorChain(Exception):
    """One node of an error derivation chain.

    Every derivation (wrap, wrap_cause, with_args, ...) returns a new node
    pointing back at the node it was derived from. A node answers is_()
    for itself, for every node it was derived from and for its causes.

    Nodes are not modified after construction, except extra() which
    appends to the node's extras in place. Append extras before the node
    is shared between threads.

    Raising a node lets Python write __traceback__ and __context__ on it.
    Raise a node derived from a shared sentinel (ErrNotFound.wrap("key")),
    not the sentinel itself.

    Printing scheme (render / str):

      base: first; second > last < cause + extra

    The root-most text is set off with ':', intermediate derivations are
    separated with ';' and the last derivation follows '>'. A cause is
    appended to the text of the node that holds it after '<' and extras
    of the printed node follow '+'. Template nodes never print.
    """

    def __init__(
        self,
        text: str,
        *,
        wrapped: Optional[ErrorChain] = None,
        cause: Any = None,
        data: Any = None,
        template: bool = False,
    ) -> None:
        super().__init__(text)
        self._text = text
        self._wrapped = wrapped
        self._cause = cause
        self._data = data
        self._template = template
        self._extras: list[Any] = []
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    @property
    def text(self) -> str:
        return self._text

    @property
    def wrapped(self) -> Optional[ErrorChain]:
        return self._wrapped

    @property
    def cause(self) -> Any:
        return self._cause

    @property
    def data(self) -> Any:
        """Payload attached to this node only."""
        return self._data

    @property
    def is_template(self) -> bool:
        return self._template

    @property
    def extras(self) -> tuple[Any, ...]:
        return tuple(self._extras)

    # Derivation

    def _derive(
        self, text: str, *, cause: Any = None, data: Any = None, template: bool = False
    ) -> ErrorChain:
        return type(self)(text, wrapped=self, cause=cause, data=data, template=template)

    def _fill(self, args: tuple[Any, ...]) -> str:
        if self._template:
            return format_args(self._text, args)
        return join_args(args)

    def wrap(self, message: str) -> ErrorChain:
        return self._derive(message)

    def wrap_template(self, format: str) -> ErrorChain:
        """Derive a non-printing node whose text is a format string.

        The format is filled by with_args, wrap_cause_with_args or
        wrap_data_with_args called on the returned node.
        """
        return self._derive(format, template=True)

    def wrap_data_template(self, format: str, data: Any) -> ErrorChain:
        """Like wrap_template, with a payload on the template node."""
        return self._derive(format, data=data, template=True)

    def with_args(self, *args: Any) -> ErrorChain:
        """Derive a node whose text is this node's format filled with args.

        On a node that is not a template the args are joined with spaces.
        """
        return self._derive(self._fill(args))

    def wrap_cause(self, message: str, cause: Any) -> ErrorChain:
        """Derive a node that was caused by cause.

        The result is_() every ancestor of this node and everything cause
        is_(). Example:

          err = new("A").wrap("B").wrap_cause("C", new("D").wrap("E"))
          str(err)  # "A: B > C < D: E"
        """
        return self._derive(message, cause=cause)

    def wrap_cause_with_args(self, cause: Any, *args: Any) -> ErrorChain:
        return self._derive(self._fill(args), cause=cause)

    def wrap_data(self, message: str, data: Any) -> ErrorChain:
        return self._derive(message, data=data)

    def wrap_data_with_args(self, data: Any, *args: Any) -> ErrorChain:
        return self._derive(self._fill(args), data=data)

    def extra(self, err: Any) -> ErrorChain:
        """Append err to this node's extras and return this node."""
        self._extras.append(err)
        return self

    # Inspection

    def unwrap(self) -> Optional[ErrorChain]:
        return self._wrapped

    def is_(self, target: Any) -> bool:
        """Report whether this node, an ancestor or a cause is target.

        Matching is by identity. Exception classes match by isinstance.
        Extras never match.
        """
        if isinstance(target, type) and isinstance(self, target):
            return True
        node: Optional[ErrorChain] = self
        while node is not None:
            if node is target:
                return True
            if node._cause is not None and is_error(node._cause, target):
                return True
            node = node._wrapped
        return False

    def any_data(self) -> Any:
        """First payload found walking from this node towards the root."""
        node: Optional[ErrorChain] = self
        while node is not None:
            if node._data is not None:
                return node._data
            node = node._wrapped
        return None

    # Rendering

    def render(self) -> str:
        message = "" if self._template else self._text
        if self._cause is not None:
            message = f"{message} < {_render(self._cause)}"

        # Nearest ancestor first.
        stack: list[str] = []
        node = self._wrapped
        while node is not None:
            if not node._template and node._text:
                entry = node._text
                if node._cause is not None:
                    entry = f"{entry} < {_render(node._cause)}"
                stack.append(entry)
            node = node._wrapped

        if not stack:
            out = message
        elif len(stack) == 1:
            out = f"{stack[0]}: {message}" if message else stack[0]
        else:
            out = f"{stack[-1]}: " + "; ".join(reversed(stack[:-1]))
            if message:
                out = f"{out} > {message}"

        for extra in self._extras:
            out = f"{out} + {_render(extra)}"
        return out

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"


def _render(err: Any) -> str:
    if isinstance(err, ErrorChain):
        return err.render()
    return str(err)


def new(message: str) -> ErrorChain:
    """Return a new root error with message."""
    return ErrorChain(message)


def new_template(format: str) -> ErrorChain:
    """Return a new non-printing root error whose text is a format string.

    Derive from it with with_args (or the *_with_args variants) to get a
    printable error. The template node stays in the chain and answers is_().
    """
    return ErrorChain(format, template=True)
