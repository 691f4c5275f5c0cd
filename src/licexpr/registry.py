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

"""Listed-license registry: which identifiers are standard SPDX licenses.

The parser only needs two questions answered, captured by
:class:`ListedLicenseRegistry`. Any object with those two methods can be
passed to :func:`licexpr.parser.parse`. :class:`LicenseRegistry` is the
built-in implementation, backed by ``data/licenses.toml``.

Usage::

    from licexpr.registry import LicenseRegistry

    registry = LicenseRegistry.load()  # built-in data
    registry = LicenseRegistry.load(user_toml=Path(...))  # + user overrides
    registry = LicenseRegistry.from_ids(['MIT', 'Apache-2.0'])

    registry.is_listed_license_id('mit')  # True
    registry.get_listed_license_by_id('mit')  # SimpleLicense(id='MIT')
"""

from __future__ import annotations

import functools
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from licexpr.errors import LicenseDataError, LicenseLookupError
from licexpr.logging import get_logger
from licexpr.tree import SimpleLicense

__all__ = [
    'LicenseRegistry',
    'ListedLicense',
    'ListedLicenseRegistry',
    'default_registry',
]

log = get_logger('licexpr.registry')

_DATA_DIR = Path(__file__).resolve().parent / 'data'
_LICENSES_TOML = _DATA_DIR / 'licenses.toml'


class ListedLicenseRegistry(Protocol):
    """Protocol for objects that know the standard license list."""

    def is_listed_license_id(self, license_id: str) -> bool:
        """Return whether *license_id* is a listed license."""  # pragma: no cover
        ...

    def get_listed_license_by_id(self, license_id: str) -> SimpleLicense:
        """Return the canonical license for *license_id*.

        Raises:
            LicenseLookupError: If *license_id* is not listed.
        """  # pragma: no cover
        ...


@dataclass(frozen=True)
class ListedLicense:
    """Metadata for a single listed license.

    Attributes:
        spdx_id: Canonical SPDX identifier.
        name: Human-readable full name.
        osi_approved: Whether OSI has approved this license.
        deprecated: Whether SPDX has deprecated this identifier.
    """

    spdx_id: str
    name: str
    osi_approved: bool = False
    deprecated: bool = False


@dataclass
class LicenseRegistry:
    """In-memory listed-license registry.

    Lookups are case-insensitive; results carry the canonical casing.

    Attributes:
        licenses: Mapping from canonical SPDX ID to its metadata.
    """

    licenses: dict[str, ListedLicense] = field(default_factory=dict)
    _by_lower: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._reindex()

    # ── Loading ──────────────────────────────────────────────────────

    @classmethod
    def load(
        cls,
        *,
        licenses_toml: Path | None = None,
        user_toml: Path | None = None,
    ) -> LicenseRegistry:
        """Load the registry from TOML data files.

        Args:
            licenses_toml: Path to the license list TOML. Defaults to
                the built-in ``data/licenses.toml``.
            user_toml: Optional user-provided TOML whose ``[licenses.*]``
                tables are merged on top of the built-in data.

        Returns:
            A fully constructed :class:`LicenseRegistry`.

        Raises:
            LicenseDataError: If any entry fails validation.
        """
        registry = cls()
        registry._load_licenses(licenses_toml or _LICENSES_TOML)  # noqa: SLF001
        if user_toml and user_toml.is_file():
            registry._load_user_overrides(user_toml)  # noqa: SLF001
        registry._reindex()  # noqa: SLF001
        log.debug('license_registry_loaded', count=len(registry.licenses), user_toml=str(user_toml or ''))
        return registry

    @classmethod
    def from_ids(cls, ids: Iterable[str]) -> LicenseRegistry:
        """Build a registry listing exactly *ids*, with no metadata."""
        return cls(licenses={spdx_id: ListedLicense(spdx_id=spdx_id, name=spdx_id) for spdx_id in ids})

    def _load_licenses(self, path: Path) -> None:
        """Parse a license list TOML and populate :attr:`licenses`."""
        with path.open('rb') as f:
            data = tomllib.load(f)
        errors = self._merge_tables(data, source=path.name)
        if errors:
            raise LicenseDataError(errors)

    def _load_user_overrides(self, path: Path) -> None:
        """Merge user-provided TOML on top of built-in data.

        Expected format::

            [licenses.LicenseRef-Acme-1.0]
            name = "Acme Corp License"
            osi_approved = false
        """
        with path.open('rb') as f:
            data = tomllib.load(f)
        tables = data.get('licenses', {})
        if not isinstance(tables, dict):
            raise LicenseDataError([f'{path.name}: "licenses" must be a table'])
        errors = self._merge_tables(tables, source=path.name)
        if errors:
            raise LicenseDataError(errors)
        log.info('license_registry_overrides_applied', path=str(path), count=len(tables))

    def _merge_tables(self, tables: dict[str, object], *, source: str) -> list[str]:
        # Keys match case-insensitively; an override keeps the existing casing.
        index = {key.lower(): key for key in self.licenses}
        errors: list[str] = []
        for table_key, info in tables.items():
            if not isinstance(info, dict):
                errors.append(f'{source} [{table_key}]: expected a table, got {type(info).__name__}')
                continue
            if any(c.isspace() or c in '()' for c in table_key) or table_key.endswith('+'):
                errors.append(f'{source} [{table_key}]: not a valid license identifier')
                continue
            spdx_id = index.get(table_key.lower(), table_key)
            existing = self.licenses.get(spdx_id)
            if 'name' not in info and existing is None:
                errors.append(f'{source} [{spdx_id}]: missing required field "name"')
                continue
            name = info.get('name', existing.name if existing else spdx_id)
            if not isinstance(name, str):
                errors.append(f'{source} [{spdx_id}].name: expected string, got {type(name).__name__}')
                continue
            flags: dict[str, bool] = {}
            for key in ('osi_approved', 'deprecated'):
                value = info.get(key, getattr(existing, key) if existing else False)
                if not isinstance(value, bool):
                    errors.append(f'{source} [{spdx_id}].{key}: expected bool, got {type(value).__name__}')
                flags[key] = bool(value)
            unknown = sorted(set(info) - {'name', 'osi_approved', 'deprecated'})
            if unknown:
                errors.append(f'{source} [{spdx_id}]: unknown field(s) {", ".join(unknown)}')
            self.licenses[spdx_id] = ListedLicense(spdx_id=spdx_id, name=name, **flags)
            index[spdx_id.lower()] = spdx_id
        return errors

    def _reindex(self) -> None:
        self._by_lower = {spdx_id.lower(): spdx_id for spdx_id in self.licenses}

    # ── Queries ──────────────────────────────────────────────────────

    def canonical_id(self, license_id: str) -> str | None:
        """Return the canonical casing of *license_id*, or ``None``."""
        return self._by_lower.get(license_id.lower())

    def is_listed_license_id(self, license_id: str) -> bool:
        """Return ``True`` if *license_id* is a listed license."""
        return self.canonical_id(license_id) is not None

    def get_listed_license_by_id(self, license_id: str) -> SimpleLicense:
        """Return the :class:`SimpleLicense` for *license_id*.

        Raises:
            LicenseLookupError: If *license_id* is not listed.
        """
        canonical = self.canonical_id(license_id)
        if canonical is None:
            raise LicenseLookupError(license_id)
        return SimpleLicense(canonical)

    def info(self, license_id: str) -> ListedLicense | None:
        """Return the metadata for *license_id*, or ``None``."""
        canonical = self.canonical_id(license_id)
        return self.licenses[canonical] if canonical else None


@functools.lru_cache(maxsize=None)
def default_registry(user_toml: Path | None = None) -> LicenseRegistry:
    """Return the process-wide built-in registry.

    Loaded once per distinct *user_toml* and never mutated afterwards.
    """
    return LicenseRegistry.load(user_toml=user_toml)
