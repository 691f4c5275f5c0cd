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
#
"""Verify the built-in licenses.toml against the SPDX License List.

Fetches the SPDX license list JSON and checks, for every entry in
``src/licexpr/data/licenses.toml``:

1. The identifier exists in the official list (exact casing).
2. ``osi_approved`` matches ``isOsiApproved``.
3. ``deprecated`` matches ``isDeprecatedLicenseId``.

Exit codes:
    0  All checks passed.
    1  One or more errors found.

Usage::

    python scripts/verify_license_data.py
    python scripts/verify_license_data.py --licenses path/to/licenses.toml

Sources:
    - SPDX License List:        https://spdx.org/licenses/
"""

from __future__ import annotations

import argparse
import json
import sys
import urllib.request
from pathlib import Path

SPDX_URL = 'https://raw.githubusercontent.com/spdx/license-list-data/main/json/licenses.json'

LICENSES_TOML = Path(__file__).resolve().parent.parent / 'src' / 'licexpr' / 'data' / 'licenses.toml'


def _load_licenses_toml(path: Path) -> dict[str, dict]:
    """Load and return the parsed licenses.toml."""
    try:
        import tomllib  # type: ignore[unresolved-import]  # stdlib 3.11+; tomli fallback below
    except ModuleNotFoundError:
        import tomli as tomllib

    with open(path, 'rb') as f:
        return tomllib.load(f)


def _fetch(url: str) -> bytes:
    """Fetch a URL and return the raw bytes."""
    if not url.startswith('https://'):
        msg = f'Only https:// URLs are allowed, got: {url}'
        raise ValueError(msg)
    with urllib.request.urlopen(url) as resp:  # noqa: S310
        return resp.read()


def check_spdx(our_licenses: dict[str, dict], spdx_data: dict) -> list[str]:
    """Compare our entries with the SPDX license list JSON.

    Args:
        our_licenses: Parsed ``licenses.toml``.
        spdx_data: Parsed SPDX ``licenses.json``.

    Returns:
        Human-readable error messages; empty when everything matches.
    """
    spdx_lookup: dict[str, dict] = {lic['licenseId']: lic for lic in spdx_data['licenses']}

    errors: list[str] = []
    for spdx_id, entry in sorted(our_licenses.items()):
        upstream = spdx_lookup.get(spdx_id)
        if upstream is None:
            errors.append(f'  [MISSING] {spdx_id} — not found in SPDX license list')
            continue
        ours_osi = entry.get('osi_approved', False)
        spdx_osi = upstream.get('isOsiApproved', False)
        if ours_osi != spdx_osi:
            errors.append(f'  [OSI MISMATCH] {spdx_id}: ours={ours_osi}, SPDX={spdx_osi}')
        ours_dep = entry.get('deprecated', False)
        spdx_dep = upstream.get('isDeprecatedLicenseId', False)
        if ours_dep != spdx_dep:
            errors.append(f'  [DEPRECATED MISMATCH] {spdx_id}: ours={ours_dep}, SPDX={spdx_dep}')
    return errors


def main() -> int:
    """Run the SPDX check and return 0 on success, 1 on failure."""
    parser = argparse.ArgumentParser(
        description='Verify licenses.toml against the SPDX License List.',
    )
    parser.add_argument(
        '--licenses',
        type=Path,
        default=LICENSES_TOML,
        help='Path to the licenses.toml to check.',
    )
    args = parser.parse_args()

    our_licenses = _load_licenses_toml(args.licenses)
    errors = check_spdx(our_licenses, json.loads(_fetch(SPDX_URL)))
    for error in errors:
        print(error)  # noqa: T201
    print(f'{len(our_licenses)} licenses checked, {len(errors)} error(s)')  # noqa: T201
    return 1 if errors else 0


if __name__ == '__main__':
    sys.exit(main())
