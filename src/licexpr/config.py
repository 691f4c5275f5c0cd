# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Parser configuration: ``[tool.licexpr]`` in ``pyproject.toml`` plus env vars.

Example::

    [tool.licexpr]
    max_depth = 32
    registry_overrides = "licenses.local.toml"

Environment overrides (applied by :func:`resolve_config`):

- ``LICEXPR_MAX_DEPTH``: integer, replaces ``max_depth``.
- ``LICEXPR_REGISTRY_OVERRIDES``: path, replaces ``registry_overrides``.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from licexpr.errors import ConfigError

__all__ = [
    'DEFAULT_MAX_DEPTH',
    'ParserConfig',
    'load_config',
    'resolve_config',
]

#: Default limit on parenthesis nesting.
DEFAULT_MAX_DEPTH: Final[int] = 64

_ENV_MAX_DEPTH = 'LICEXPR_MAX_DEPTH'
_ENV_REGISTRY_OVERRIDES = 'LICEXPR_REGISTRY_OVERRIDES'

_ALLOWED_KEYS: frozenset[str] = frozenset({'max_depth', 'registry_overrides'})


@dataclass(frozen=True)
class ParserConfig:
    """Settings for :func:`licexpr.parser.parse`.

    Attributes:
        max_depth: Maximum parenthesis nesting depth accepted.
        registry_overrides: Optional TOML file merged on top of the
            built-in license registry.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    registry_overrides: Path | None = None


def _parse_config(section: Mapping[str, Any], *, base_dir: Path | None = None) -> ParserConfig:
    """Validate a ``[tool.licexpr]`` table and build a :class:`ParserConfig`."""
    unknown = sorted(set(section) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigError(f'Unknown key(s) in [tool.licexpr]: {", ".join(unknown)}')

    cfg = ParserConfig()
    if 'max_depth' in section:
        max_depth = section['max_depth']
        # bool is an int subclass; reject it explicitly.
        if not isinstance(max_depth, int) or isinstance(max_depth, bool):
            raise ConfigError(f'[tool.licexpr].max_depth: expected integer, got {type(max_depth).__name__}')
        if max_depth < 1:
            raise ConfigError(f'[tool.licexpr].max_depth: must be >= 1, got {max_depth}')
        cfg = replace(cfg, max_depth=max_depth)
    if 'registry_overrides' in section:
        raw = section['registry_overrides']
        if not isinstance(raw, str) or not raw:
            raise ConfigError('[tool.licexpr].registry_overrides: expected a non-empty path string')
        path = Path(raw)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        cfg = replace(cfg, registry_overrides=path)
    return cfg


def load_config(pyproject: Path) -> ParserConfig:
    """Read ``[tool.licexpr]`` from *pyproject*.

    A missing file or missing table yields the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or the table is invalid.
    """
    if not pyproject.is_file():
        return ParserConfig()
    try:
        with pyproject.open('rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'{pyproject}: invalid TOML: {exc}') from exc
    section = data.get('tool', {}).get('licexpr', {})
    if not isinstance(section, dict):
        raise ConfigError(f'{pyproject}: [tool.licexpr] must be a table')
    return _parse_config(section, base_dir=pyproject.parent)


def resolve_config(
    config: ParserConfig | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ParserConfig:
    """Apply environment overrides on top of *config*.

    Args:
        config: Base configuration; defaults when ``None``.
        env: Environment mapping; :data:`os.environ` when ``None``.

    Raises:
        ConfigError: If an override value is invalid.
    """
    cfg = config or ParserConfig()
    environ = os.environ if env is None else env

    raw_depth = environ.get(_ENV_MAX_DEPTH, '').strip()
    if raw_depth:
        try:
            max_depth = int(raw_depth)
        except ValueError as exc:
            raise ConfigError(f'{_ENV_MAX_DEPTH}: expected integer, got {raw_depth!r}') from exc
        if max_depth < 1:
            raise ConfigError(f'{_ENV_MAX_DEPTH}: must be >= 1, got {max_depth}')
        cfg = replace(cfg, max_depth=max_depth)

    raw_overrides = environ.get(_ENV_REGISTRY_OVERRIDES, '').strip()
    if raw_overrides:
        cfg = replace(cfg, registry_overrides=Path(raw_overrides))
    return cfg
