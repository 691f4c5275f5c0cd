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

"""Tests for licexpr.logging module."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from licexpr.errors import LicenseParseError
from licexpr.logging import configure_logging, get_logger
from licexpr.parser import parse
from licexpr.registry import LicenseRegistry

SRC = Path(__file__).resolve().parent.parent / 'src'


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Re-point the root handler at the session stream after each test."""
    yield
    configure_logging(quiet=True)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default logging level should be INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose flag should set DEBUG level."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_sets_warning(self) -> None:
        """Quiet flag should set WARNING level."""
        configure_logging(quiet=True)
        assert logging.root.level == logging.WARNING

    def test_quiet_wins_over_verbose(self) -> None:
        """Quiet takes precedence when both flags are set."""
        configure_logging(verbose=True, quiet=True)
        assert logging.root.level == logging.WARNING

    def test_json_log_does_not_crash(self) -> None:
        """JSON log mode should configure without errors."""
        configure_logging(json_log=True)
        log = get_logger()
        log.info('test_json', key='value')

    def test_idempotent(self) -> None:
        """Calling configure_logging twice should not crash."""
        configure_logging()
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG


class TestGetLogger:
    """Tests for get_logger()."""

    def test_returns_bound_logger(self) -> None:
        """get_logger should return a structlog BoundLogger."""
        configure_logging()
        log = get_logger('test')
        assert log is not None

    def test_default_name(self) -> None:
        """Default logger name should be 'licexpr'."""
        configure_logging()
        log = get_logger()
        assert log is not None


class TestParserEvents:
    """The parser emits debug events through the configured logger."""

    def test_parsed_and_rejected_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test parsed and rejected events."""
        configure_logging(verbose=True, json_log=True)
        registry = LicenseRegistry.from_ids(['MIT'])
        parse('MIT', registry)
        with pytest.raises(LicenseParseError):
            parse('(MIT', registry)
        err = capsys.readouterr().err
        assert 'license_expression_parsed' in err
        assert 'license_expression_rejected' in err
        assert 'UNMATCHED_PAREN' in err


class TestUnconfigured:
    """Without configure_logging() the library stays silent."""

    def test_namespace_has_null_handler(self) -> None:
        """Test namespace has null handler."""
        handlers = logging.getLogger('licexpr').handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_events_reach_stdlib_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        """Events are stdlib records, so hosts can filter them by name and level."""
        caplog.set_level(logging.DEBUG, logger='licexpr')
        parse('MIT', LicenseRegistry.from_ids(['MIT']))
        records = [r for r in caplog.records if r.name == 'licexpr.parser']
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert records[0].msg['event'] == 'license_expression_parsed'

    def test_debug_dropped_below_level(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test debug dropped below level."""
        caplog.set_level(logging.INFO, logger='licexpr')
        parse('MIT', LicenseRegistry.from_ids(['MIT']))
        assert not [r for r in caplog.records if r.name.startswith('licexpr')]

    def test_parse_writes_nothing_in_fresh_interpreter(self) -> None:
        """Parsing and loading the default registry produce no output."""
        code = (
            'from licexpr import parse\n'
            'from licexpr.registry import LicenseRegistry\n'
            "parse('MIT', LicenseRegistry.from_ids(['MIT']))\n"
            "parse('MIT OR ISC')\n"
            'try:\n'
            "    parse('(MIT')\n"
            'except ValueError:\n'
            '    pass\n'
        )
        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(p for p in (str(SRC), env.get('PYTHONPATH', '')) if p)
        env.pop('LICEXPR_MAX_DEPTH', None)
        env.pop('LICEXPR_REGISTRY_OVERRIDES', None)
        result = subprocess.run(  # noqa: S603
            [sys.executable, '-c', code],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )
        assert result.stdout == ''
        assert 'license_' not in result.stderr
