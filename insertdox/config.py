"""Options for one annotation run and their YAML configuration file."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


class ConfigError(RuntimeError):
    """Raised when the configuration file is invalid."""


@dataclass
class Options:
    """Settings consumed while annotating a single file.

    ``filename`` is what the synthesized ``@file`` tag shows; ``None`` means
    the input has no name (standard input).
    """

    filename: Optional[str] = None
    boilerplate: Optional[pathlib.Path] = None
    only_prototypes: bool = False
    window_limit: Optional[int] = None

    def for_file(self, filename: Optional[str]) -> 'Options':
        return replace(self, filename=filename)


KNOWN_KEYS = ('only_prototypes', 'boilerplate', 'window_limit')


def load_config(path: pathlib.Path) -> Dict[str, Any]:
    """Read ``path`` and return the validated settings it contains.

    ``boilerplate`` is resolved relative to the configuration file.
    """

    import yaml  # type: ignore

    try:
        with path.open('r', encoding='utf-8') as handle:
            data = yaml.safe_load(handle) or {}
    except OSError as exc:
        raise ConfigError(f"unable to open '{path}' to read") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"'{path}' is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"'{path}' must contain a mapping")

    unknown = sorted(set(data) - set(KNOWN_KEYS))
    if unknown:
        raise ConfigError(f"unknown setting(s) in '{path}': {', '.join(map(str, unknown))}")

    settings: Dict[str, Any] = {}
    if 'only_prototypes' in data:
        value = data['only_prototypes']
        if not isinstance(value, bool):
            raise ConfigError("'only_prototypes' must be true or false")
        settings['only_prototypes'] = value
    if data.get('boilerplate') is not None:
        value = data['boilerplate']
        if not isinstance(value, str):
            raise ConfigError("'boilerplate' must be a path")
        settings['boilerplate'] = path.parent / value
    if data.get('window_limit') is not None:
        value = data['window_limit']
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError("'window_limit' must be a positive integer")
        settings['window_limit'] = value
    return settings
