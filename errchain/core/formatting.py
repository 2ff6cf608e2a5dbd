from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

log = logging.getLogger(__name__)


def join_args(args: tuple[Any, ...]) -> str:
    return " ".join(str(a) for a in args)


def format_args(template: str, args: tuple[Any, ...]) -> str:
    """Fill a printf-style template with args.

    A single mapping argument fills named fields (``%(key)s``) when the
    template has any; otherwise it is treated like any other argument.
    Never raises: on a mismatch the template is kept and the args are
    appended after it.
    """

    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and "%(" in template:
        values = args[0]
    try:
        return template % values
    except (TypeError, ValueError, KeyError) as e:
        log.debug("cannot format %r with %r: %s", template, args, e)
        if not args:
            return template
        return f"{template} {join_args(args)}"
