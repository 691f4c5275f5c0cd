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

r"""License expression parsing.

Parses license expressions such as
``(MIT OR Apache-2.0) AND GPL-2.0-or-later WITH Classpath-exception-2.0``
into an immutable expression tree.

Usage::

    from licexpr import Conjunctive, LicenseRegistry, SimpleLicense, parse

    expr = parse('MIT AND BSD-2-Clause AND ISC')
    assert isinstance(expr, Conjunctive)
    assert len(expr.members) == 3

    # Bring your own license list:
    registry = LicenseRegistry.from_ids(['Acme-1.0'])
    assert parse('Acme-1.0', registry) == SimpleLicense('Acme-1.0')
"""

from licexpr.config import ParserConfig, load_config, resolve_config
from licexpr.errors import (
    ConfigError,
    LicenseDataError,
    LicenseLookupError,
    LicenseParseError,
    LicexprError,
    ParseErrorReason,
)
from licexpr.parser import parse, parse_tokens
from licexpr.registry import LicenseRegistry, ListedLicenseRegistry, default_registry
from licexpr.tokenizer import tokenize
from licexpr.tree import (
    Conjunctive,
    Disjunctive,
    ExtractedLicense,
    LicenseExpression,
    NoAssertion,
    NoneLicense,
    OrLater,
    SimpleLicense,
    WithException,
    license_ids,
    render,
)

__all__ = [
    'ConfigError',
    'Conjunctive',
    'Disjunctive',
    'ExtractedLicense',
    'LicenseDataError',
    'LicenseExpression',
    'LicenseLookupError',
    'LicenseParseError',
    'LicenseRegistry',
    'LicexprError',
    'ListedLicenseRegistry',
    'NoAssertion',
    'NoneLicense',
    'OrLater',
    'ParseErrorReason',
    'ParserConfig',
    'SimpleLicense',
    'WithException',
    'default_registry',
    'license_ids',
    'load_config',
    'parse',
    'parse_tokens',
    'render',
    'resolve_config',
    'tokenize',
]
