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

"""Tests for the license expression tokenizer."""

from __future__ import annotations

import pytest
from licexpr.tokenizer import tokenize


class TestWhitespace:
    """Tests for whitespace splitting."""

    def test_single_token(self) -> None:
        """Test single token."""
        assert tokenize('MIT') == ['MIT']

    def test_runs_of_whitespace(self) -> None:
        """Test runs of whitespace."""
        assert tokenize('  MIT \t OR\n\nApache-2.0  ') == ['MIT', 'OR', 'Apache-2.0']

    @pytest.mark.parametrize('expression', ['', '   ', '\t\n'])
    def test_blank(self, expression: str) -> None:
        """Blank input yields no tokens and does not fail."""
        assert tokenize(expression) == []

    def test_keywords_verbatim(self) -> None:
        """Keywords are emitted as written; case is not normalized."""
        assert tokenize('A and B WITH c') == ['A', 'and', 'B', 'WITH', 'c']


class TestStructuralCharacters:
    """Tests for parentheses and '+' glued to identifiers."""

    def test_wrapped_id(self) -> None:
        """Test wrapped id."""
        assert tokenize('(MIT)') == ['(', 'MIT', ')']

    def test_or_later(self) -> None:
        """Test or later."""
        assert tokenize('GPL-2.0+') == ['GPL-2.0', '+']

    def test_or_later_inside_group(self) -> None:
        """Test or later inside group."""
        assert tokenize('(MIT OR GPL-2.0+)') == ['(', 'MIT', 'OR', 'GPL-2.0', '+', ')']

    def test_multiple_parens(self) -> None:
        """Test multiple parens."""
        assert tokenize('((MIT))') == ['(', '(', 'MIT', ')', ')']

    def test_paren_then_plus(self) -> None:
        """Suffixes come out in source order."""
        assert tokenize('(MIT)+') == ['(', 'MIT', ')', '+']
        assert tokenize('MIT+)') == ['MIT', '+', ')']

    def test_lone_structural_tokens(self) -> None:
        """Test lone structural tokens."""
        assert tokenize('( ) +') == ['(', ')', '+']
        assert tokenize('()') == ['(', ')']

    def test_inner_characters_untouched(self) -> None:
        """Only leading '(' and trailing ')' / '+' are split off."""
        assert tokenize('A(B C+D E)F') == ['A(B', 'C+D', 'E)F']

    def test_full_expression(self) -> None:
        """Test full expression."""
        tokens = tokenize('(MIT OR Apache-2.0) AND GPL-2.0+ WITH Classpath-exception-2.0')
        assert tokens == [
            '(',
            'MIT',
            'OR',
            'Apache-2.0',
            ')',
            'AND',
            'GPL-2.0',
            '+',
            'WITH',
            'Classpath-exception-2.0',
        ]

    def test_very_long_chunk(self) -> None:
        """Deep glued nesting does not exhaust the interpreter stack."""
        tokens = tokenize('(' * 5000 + 'MIT' + ')' * 5000)
        assert len(tokens) == 10001
        assert tokens[5000] == 'MIT'
