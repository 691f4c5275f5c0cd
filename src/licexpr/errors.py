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

"""Exception types raised by licexpr.

This module must have **zero** imports from other ``licexpr`` modules
so every layer (tree, registry, parser, config) can import it freely.
"""

from __future__ import annotations

import enum

__all__ = [
    'ConfigError',
    'LicenseDataError',
    'LicenseLookupError',
    'LicenseParseError',
    'LicexprError',
    'ParseErrorReason',
]


class LicexprError(Exception):
    """Base class for every error raised by licexpr."""


class ParseErrorReason(enum.Enum):
    """Why a license expression was rejected.

    Each member maps to one structural violation the parser detects.
    """

    EMPTY_EXPRESSION = 'empty license expression'
    UNMATCHED_PAREN = 'unmatched parenthesis'
    MISSING_EXCEPTION = 'missing exception clause'
    MISSING_WITH_LICENSE = 'missing license for with clause'
    INVALID_WITH_OPERAND = 'invalid license for with clause'
    INVALID_OR_LATER_OPERAND = "invalid license for the '+' or later operator"
    MISSING_OPERANDS = 'missing operands'
    UNKNOWN_OPERATOR = 'unknown operator'
    TRAILING_OPERANDS = 'expecting more operands'
    NESTING_TOO_DEEP = 'parentheses nested too deeply'


class LicenseParseError(LicexprError, ValueError):
    """Raised when a license expression cannot be parsed.

    Attributes:
        reason: The :class:`ParseErrorReason` describing the violation.
        detail: Human-readable description of the problem.
        expression: The original expression text, if known.
    """

    def __init__(self, reason: ParseErrorReason, detail: str = '', expression: str = '') -> None:
        """Initialize with a reason, an optional detail and the source text."""
        self.reason = reason
        self.detail = detail or reason.value
        self.expression = expression
        message = f'license expression parse error: {self.detail}'
        if expression:
            message = f'{message}\n  {expression}'
        super().__init__(message)


class LicenseLookupError(LicexprError, LookupError):
    """Raised when a registry is asked for a license it does not list.

    Attributes:
        license_id: The identifier that was looked up.
    """

    def __init__(self, license_id: str) -> None:
        self.license_id = license_id
        super().__init__(f'{license_id!r} is not a listed license')


class LicenseDataError(LicexprError):
    """Raised when license registry TOML data fails validation.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'License registry has {len(errors)} validation error(s):\n{bullet_list}')


class ConfigError(LicexprError):
    """Raised when the ``[tool.licexpr]`` configuration is invalid."""
