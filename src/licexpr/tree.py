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

r"""License expression tree node types.

Every parsed expression is built from a closed set of frozen dataclasses.
:data:`LicenseExpression` is their union; consumers dispatch on it with
``isinstance`` and treat anything else as a programming error.

Key Concepts (ELI5)::

    ┌─────────────────────┬──────────────────────────────────────────────┐
    │ Node                 │ Plain-English                                │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ SimpleLicense        │ A license the registry knows (e.g. MIT).    │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ ExtractedLicense     │ A custom license known only by its id       │
    │                      │ (e.g. LicenseRef-Acme). Text comes later.   │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ NoAssertion / None   │ "We don't say" / "there is no license".     │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ OrLater              │ GPL-2.0+ : this version or any later one.   │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ WithException        │ A license plus an exception clause.         │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Conjunctive (AND)    │ Must comply with ALL members.               │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Disjunctive (OR)     │ May choose ANY member.                      │
    └─────────────────────┴──────────────────────────────────────────────┘

Usage::

    from licexpr.tree import Conjunctive, SimpleLicense, render

    expr = Conjunctive((SimpleLicense('MIT'), SimpleLicense('ISC')))
    assert render(expr) == 'MIT AND ISC'
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    'Conjunctive',
    'Disjunctive',
    'ExtractedLicense',
    'LicenseExpression',
    'NoAssertion',
    'NoneLicense',
    'OrLater',
    'SimpleLicense',
    'WithException',
    'license_ids',
    'render',
]

NOASSERTION = 'NOASSERTION'
NONE = 'NONE'


@dataclass(frozen=True)
class SimpleLicense:
    """A listed standard license, resolved through a registry.

    Attributes:
        id: The canonical SPDX short identifier (e.g. ``"Apache-2.0"``).
    """

    id: str

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class ExtractedLicense:
    """A non-standard license referenced only by its local id.

    Attributes:
        id: The identifier exactly as written in the expression.
        text: The license text. The parser never knows it and leaves
            it as ``None``.
    """

    id: str
    text: str | None = None

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class NoAssertion:
    """The ``NOASSERTION`` sentinel."""

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class NoneLicense:
    """The ``NONE`` sentinel."""

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class OrLater:
    """A simple license followed by ``+``.

    Attributes:
        license: The base license.
    """

    license: SimpleLicense

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class WithException:
    """A license decorated with an exception (``license WITH exception``).

    Attributes:
        license: The base license; never a set or another exception.
        exception: The exception identifier, unvalidated.
    """

    license: SimpleLicense | ExtractedLicense | OrLater
    exception: str

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class Conjunctive:
    """Logical AND over two or more members.

    Attributes:
        members: The member expressions in source order.
    """

    members: tuple[LicenseExpression, ...]

    def __post_init__(self) -> None:
        if len(self.members) < 2:
            raise ValueError(f'Conjunctive needs at least 2 members, got {len(self.members)}')

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class Disjunctive:
    """Logical OR over two or more members.

    Attributes:
        members: The member expressions in source order.
    """

    members: tuple[LicenseExpression, ...]

    def __post_init__(self) -> None:
        if len(self.members) < 2:
            raise ValueError(f'Disjunctive needs at least 2 members, got {len(self.members)}')

    def __str__(self) -> str:
        return render(self)


# Union of all tree node types.
LicenseExpression = (
    SimpleLicense
    | ExtractedLicense
    | NoAssertion
    | NoneLicense
    | OrLater
    | WithException
    | Conjunctive
    | Disjunctive
)


def render(node: LicenseExpression) -> str:
    """Render an expression tree back to license expression text.

    Nested sets are parenthesized when leaving them bare would change
    the tree on re-parse. Sentinels inside a larger expression are
    parenthesized so they re-parse as sentinels and not as leaves.

    Examples::

        >>> render(Disjunctive((SimpleLicense('MIT'), OrLater(SimpleLicense('GPL-2.0')))))
        'MIT OR GPL-2.0+'
    """
    return _render(node, nested=False)


def _render(node: LicenseExpression, *, nested: bool) -> str:
    if isinstance(node, (SimpleLicense, ExtractedLicense)):
        return node.id
    if isinstance(node, NoAssertion):
        return f'({NOASSERTION})' if nested else NOASSERTION
    if isinstance(node, NoneLicense):
        return f'({NONE})' if nested else NONE
    if isinstance(node, OrLater):
        return f'{node.license.id}+'
    if isinstance(node, WithException):
        return f'{_render(node.license, nested=True)} WITH {node.exception}'
    if isinstance(node, Conjunctive):
        return ' AND '.join(
            f'({_render(m, nested=True)})' if isinstance(m, (Conjunctive, Disjunctive)) else _render(m, nested=True)
            for m in node.members
        )
    if isinstance(node, Disjunctive):
        return ' OR '.join(
            f'({_render(m, nested=True)})' if isinstance(m, Disjunctive) else _render(m, nested=True)
            for m in node.members
        )
    raise TypeError(f'not a license expression node: {type(node).__name__}')


def license_ids(node: LicenseExpression) -> set[str]:
    """Collect the ids of every listed and extracted license leaf.

    ``OrLater`` and ``WithException`` contribute their base license;
    exception ids and the ``NOASSERTION``/``NONE`` sentinels are not
    included.

    Examples::

        >>> sorted(license_ids(Conjunctive((SimpleLicense('MIT'), ExtractedLicense('LicenseRef-x')))))
        ['LicenseRef-x', 'MIT']
    """
    ids: set[str] = set()
    _collect_ids(node, ids)
    return ids


def _collect_ids(node: LicenseExpression, acc: set[str]) -> None:
    """Recursively collect license ids into *acc*."""
    if isinstance(node, (SimpleLicense, ExtractedLicense)):
        acc.add(node.id)
    elif isinstance(node, (OrLater, WithException)):
        _collect_ids(node.license, acc)
    elif isinstance(node, (Conjunctive, Disjunctive)):
        for member in node.members:
            _collect_ids(member, acc)
    elif not isinstance(node, (NoAssertion, NoneLicense)):
        raise TypeError(f'not a license expression node: {type(node).__name__}')
