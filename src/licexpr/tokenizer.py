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

"""Tokenizer for license expressions.

Parentheses and the ``+`` suffix are often written without surrounding
whitespace (``(MIT OR GPL-2.0+)``), so splitting on whitespace alone is
not enough. Each whitespace-separated chunk is peeled from the outside
in: a leading ``(``, then a trailing ``)``, then a trailing ``+``.

The tokenizer never fails; malformed input surfaces as a parse error.
"""

from __future__ import annotations

__all__ = [
    'LEFT_PAREN',
    'OR_LATER',
    'RIGHT_PAREN',
    'tokenize',
]

LEFT_PAREN = '('
RIGHT_PAREN = ')'
OR_LATER = '+'


def tokenize(expression: str) -> list[str]:
    """Split *expression* into identifier, keyword and paren tokens.

    Examples::

        >>> tokenize('(MIT OR GPL-2.0+) AND ISC')
        ['(', 'MIT', 'OR', 'GPL-2.0', '+', ')', 'AND', 'ISC']
    """
    tokens: list[str] = []
    for chunk in expression.split():
        _split_chunk(chunk, tokens)
    return tokens


def _split_chunk(chunk: str, tokens: list[str]) -> None:
    """Peel structural characters off *chunk*, appending tokens in source order.

    Suffixes peeled later sit closer to the identifier, so they are
    emitted first.
    """
    suffixes: list[str] = []
    while chunk:
        if chunk.startswith(LEFT_PAREN):
            tokens.append(LEFT_PAREN)
            chunk = chunk[1:]
        elif chunk.endswith(RIGHT_PAREN):
            suffixes.append(RIGHT_PAREN)
            chunk = chunk[:-1]
        elif chunk.endswith(OR_LATER):
            suffixes.append(OR_LATER)
            chunk = chunk[:-1]
        else:
            tokens.append(chunk)
            break
    tokens.extend(reversed(suffixes))
