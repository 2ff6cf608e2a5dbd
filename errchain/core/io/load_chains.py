from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from errchain.core.errors import ChainLoadError

log = logging.getLogger(__name__)


def load_chain_file(path: str) -> dict[str, Any]:
    """Load a YAML/JSON chain description file.

    Returns a dict with keys: errors, __file__.
    Does not check entries; build_chains owns that.
    """

    p = Path(path)
    if not p.exists():
        raise ChainLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            file=str(p),
        )

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise ChainLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(raw_text)
        elif suffix == ".json":
            data = json.loads(raw_text)
        else:
            raise ChainLoadError(
                code="E_UNSUPPORTED_FORMAT",
                message="supported formats are .yaml/.yml and .json",
                file=str(p),
            )
    except ChainLoadError:
        raise
    except Exception as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise ChainLoadError(code=code, message=str(e), file=str(p)) from e

    if not isinstance(data, dict):
        raise ChainLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping/object",
            file=str(p),
        )

    log.debug("loaded chain file %s", p)
    return {"errors": data.get("errors"), "__file__": str(p)}
