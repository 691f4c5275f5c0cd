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

r"""Operator-precedence parser for license expressions.

Turns the token list from :func:`licexpr.tokenizer.tokenize` into a
:data:`~licexpr.tree.LicenseExpression` with the shunting-yard
algorithm: one operand stack, one operator stack, and a recursive call
for every parenthesized group.

Operator precedence (tightest to loosest)::

    +  >  WITH  >  AND  >  OR

Key Concepts (ELI5)::

    ┌─────────────────────┬──────────────────────────────────────────────┐
    │ Concept              │ Plain-English                                │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Operand stack        │ Licenses (and sub-trees) waiting for an     │
    │                      │ operator to combine them.                   │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Operator stack       │ AND / OR / + waiting for their operands.    │
    │                      │ A new operator first flushes every waiting  │
    │                      │ operator that binds at least as tightly.    │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ WITH                 │ Applied immediately to the last operand;    │
    │                      │ never waits on the operator stack.          │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Left-biased merge    │ A AND B AND C → one 3-member AND.           │
    │                      │ A AND (B AND C) → AND[A, AND[B, C]]: the    │
    │                      │ right operand is never merged into.         │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ NOASSERTION / NONE   │ Sentinels only when they are the whole      │
    │                      │ (sub)expression; otherwise plain leaves.    │
    └─────────────────────┴──────────────────────────────────────────────┘

Usage::

    from licexpr.parser import parse

    expr = parse('(MIT OR Apache-2.0) AND GPL-2.0+ WITH Classpath-exception-2.0')
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Final

from licexpr.config import ParserConfig, resolve_config
from licexpr.errors import LicenseParseError, ParseErrorReason
from licexpr.logging import get_logger
from licexpr.registry import ListedLicenseRegistry, default_registry
from licexpr.tokenizer import LEFT_PAREN, OR_LATER, RIGHT_PAREN, tokenize
from licexpr.tree import (
    NOASSERTION,
    NONE,
    Conjunctive,
    Disjunctive,
    ExtractedLicense,
    LicenseExpression,
    NoAssertion,
    NoneLicense,
    OrLater,
    SimpleLicense,
    WithException,
)

__all__ = [
    'OPERATORS',
    'Operator',
    'parse',
    'parse_tokens',
]

log = get_logger('licexpr.parser')


class Operator(enum.IntEnum):
    """Expression operators; a lower value binds tighter."""

    OR_LATER = 0
    WITH = 1
    AND = 2
    OR = 3


#: Keyword token → operator. Keywords are case-sensitive.
OPERATORS: Final = MappingProxyType({
    OR_LATER: Operator.OR_LATER,
    'WITH': Operator.WITH,
    'AND': Operator.AND,
    'OR': Operator.OR,
})


def _find_matching_paren(tokens: list[str], start: int) -> int:
    """Return the index of the ``)`` closing a group opened before *start*, or -1."""
    nesting = 0
    for index in range(start, len(tokens)):
        if tokens[index] == LEFT_PAREN:
            nesting += 1
        elif tokens[index] == RIGHT_PAREN:
            if nesting == 0:
                return index
            nesting -= 1
    return -1


class _Parser:
    """Shunting-yard parser bound to one expression and one registry."""

    def __init__(self, expression: str, registry: ListedLicenseRegistry, max_depth: int) -> None:
        self._expression = expression
        self._registry = registry
        self._max_depth = max_depth

    def _error(self, reason: ParseErrorReason, detail: str = '') -> LicenseParseError:
        return LicenseParseError(reason, detail, self._expression)

    def parse_tokens(self, tokens: list[str], depth: int = 0) -> LicenseExpression:
        if depth > self._max_depth:
            raise self._error(
                ParseErrorReason.NESTING_TOO_DEEP,
                f'parentheses nested deeper than {self._max_depth} levels',
            )
        if not tokens:
            detail = 'empty parenthesized expression' if depth else 'empty license expression'
            raise self._error(ParseErrorReason.EMPTY_EXPRESSION, detail)
        if len(tokens) == 1:
            if tokens[0] == NOASSERTION:
                return NoAssertion()
            if tokens[0] == NONE:
                return NoneLicense()

        operands: list[LicenseExpression] = []
        operators: list[Operator] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1
            if token == LEFT_PAREN:
                close = _find_matching_paren(tokens, index)
                if close < 0:
                    raise self._error(ParseErrorReason.UNMATCHED_PAREN, 'missing right parenthesis')
                operands.append(self.parse_tokens(tokens[index:close], depth + 1))
                index = close + 1
                continue
            if token == RIGHT_PAREN:
                raise self._error(ParseErrorReason.UNMATCHED_PAREN, 'unexpected right parenthesis')

            operator = OPERATORS.get(token)
            if operator is None:
                operands.append(self._resolve(token))
            elif operator is Operator.WITH:
                # A pending '+' binds tighter than WITH.
                while operators and operators[-1] < Operator.WITH:
                    self._evaluate(operators.pop(), operands)
                if not operands:
                    raise self._error(ParseErrorReason.MISSING_WITH_LICENSE)
                license = operands.pop()
                if index >= len(tokens):
                    raise self._error(ParseErrorReason.MISSING_EXCEPTION)
                exception = tokens[index]
                index += 1
                if not isinstance(license, (SimpleLicense, ExtractedLicense, OrLater)):
                    raise self._error(
                        ParseErrorReason.INVALID_WITH_OPERAND,
                        f'license with exception must be a simple or or-later license, '
                        f'got {type(license).__name__}',
                    )
                operands.append(WithException(license, exception))
            else:
                while operators and operators[-1] <= operator:
                    self._evaluate(operators.pop(), operands)
                operators.append(operator)

        while operators:
            self._evaluate(operators.pop(), operands)
        if not operands:
            raise self._error(ParseErrorReason.MISSING_OPERANDS, 'expression has no license')
        result = operands.pop()
        if operands:
            raise self._error(ParseErrorReason.TRAILING_OPERANDS, 'invalid license expression, expecting more operators')
        return result

    def _resolve(self, token: str) -> LicenseExpression:
        if self._registry.is_listed_license_id(token):
            return self._registry.get_listed_license_by_id(token)
        return ExtractedLicense(token)

    def _evaluate(self, operator: Operator, operands: list[LicenseExpression]) -> None:
        """Pop *operator*'s operands from *operands* and push the combined node."""
        if operator is Operator.OR_LATER:
            if not operands:
                raise self._error(ParseErrorReason.MISSING_OPERANDS, "missing license for the '+' or later operator")
            license = operands.pop()
            if not isinstance(license, SimpleLicense):
                raise self._error(
                    ParseErrorReason.INVALID_OR_LATER_OPERAND,
                    f"'+' or later operator requires a listed license, got {type(license).__name__}",
                )
            operands.append(OrLater(license))
        elif operator in (Operator.AND, Operator.OR):
            if len(operands) < 2:
                raise self._error(ParseErrorReason.MISSING_OPERANDS, f'missing operands for the {operator.name} operator')
            operand2 = operands.pop()
            operand1 = operands.pop()
            operands.append(_merge(operator, operand1, operand2))
        else:
            raise self._error(ParseErrorReason.UNKNOWN_OPERATOR, f'unknown operator {operator.name}')


def _merge(operator: Operator, operand1: LicenseExpression, operand2: LicenseExpression) -> Conjunctive | Disjunctive:
    """Combine two operands, growing *operand1* if it is already the same kind of set."""
    set_type = Conjunctive if operator is Operator.AND else Disjunctive
    if isinstance(operand1, set_type):
        return set_type((*operand1.members, operand2))
    return set_type((operand1, operand2))


def _run(
    text: str,
    tokens: list[str],
    registry: ListedLicenseRegistry | None,
    config: ParserConfig | None,
) -> LicenseExpression:
    cfg = config if config is not None else resolve_config()
    if registry is None:
        registry = default_registry(cfg.registry_overrides)
    try:
        result = _Parser(text, registry, cfg.max_depth).parse_tokens(tokens)
    except LicenseParseError as exc:
        log.debug('license_expression_rejected', expression=text, reason=exc.reason.name, detail=exc.detail)
        raise
    log.debug('license_expression_parsed', expression=text, tokens=len(tokens))
    return result


def parse_tokens(
    tokens: list[str],
    registry: ListedLicenseRegistry | None = None,
    *,
    config: ParserConfig | None = None,
) -> LicenseExpression:
    """Parse an already tokenized license expression.

    See :func:`parse` for arguments and errors.
    """
    return _run(' '.join(tokens), list(tokens), registry, config)


def parse(
    expression: str,
    registry: ListedLicenseRegistry | None = None,
    *,
    config: ParserConfig | None = None,
) -> LicenseExpression:
    """Parse a license expression into an expression tree.

    Args:
        expression: The license expression text
            (e.g. ``"MIT OR Apache-2.0"``).
        registry: Registry used to tell listed licenses from extracted
            ones. Defaults to the built-in registry.
        config: Parser settings. Defaults to :class:`ParserConfig`
            with environment overrides applied.

    Returns:
        The root node of the parsed tree.

    Raises:
        LicenseParseError: If the expression is structurally invalid.
        LicenseLookupError: If *registry* claims an id is listed but
            cannot return it.

    Examples::

        >>> parse('MIT')
        SimpleLicense(id='MIT')

        >>> parse('GPL-2.0+ WITH Classpath-exception-2.0')
        WithException(license=OrLater(license=SimpleLicense(id='GPL-2.0')),
                      exception='Classpath-exception-2.0')
    """
    if not expression.strip():
        raise LicenseParseError(ParseErrorReason.EMPTY_EXPRESSION, 'empty license expression', expression)
    return _run(expression, tokenize(expression), registry, config)
