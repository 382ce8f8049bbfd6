"""Loading of the YAML front-end configuration (``configs/blparse.yaml``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

__all__ = ["load_config"]


def load_config(path: str | Path, *, sections: Optional[Iterable[str]] = None) -> dict[str, Any]:
    """Return the YAML mapping stored at ``path``.

    An empty document yields ``{}``. When ``sections`` is given, every
    top-level key must be one of them and map to a mapping itself, so a typo
    such as ``reprot:`` is reported instead of silently ignored.
    """

    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"configuration file not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"{config_path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: configuration root must be a mapping")
    if sections is not None:
        known = set(sections)
        for key, value in data.items():
            if key not in known:
                raise ValueError(
                    f"{config_path}: unknown section '{key}' (expected {', '.join(sorted(known))})"
                )
            if value is not None and not isinstance(value, dict):
                raise ValueError(f"{config_path}: section '{key}' must be a mapping")
    return data
