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

"""Structured logging for licexpr.

licexpr is a library, so it never installs handlers on its own. Every
logger returned by :func:`get_logger` is a `structlog
<https://www.structlog.org/>`_ bound logger wrapped around a stdlib
:class:`logging.Logger` under the ``licexpr`` namespace, which carries a
:class:`logging.NullHandler`. Until the host application configures
logging, events below ``WARNING`` are dropped and nothing is written to
stdout or stderr.

Host applications that want licexpr's events rendered can call
:func:`configure_logging`, which installs a stderr handler on the root
logger with one of two renderers:

- **Console** (default): colored when stderr is a TTY, human-readable.
- **JSON** (``json_log=True``): one JSON object per line.

Usage::

    from licexpr.logging import configure_logging

    configure_logging(verbose=True)  # in the host's startup code
"""

from __future__ import annotations

import logging
import sys

import structlog

_ROOT_LOGGER = 'licexpr'

logging.getLogger(_ROOT_LOGGER).addHandler(logging.NullHandler())

_PROCESSORS: list[structlog.types.Processor] = [  # type: ignore[assignment]
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso'),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Render licexpr events on stderr.

    Replaces the root handlers, so call it from application startup
    code only.

    Args:
        verbose: Enable debug-level output.
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of colored console output.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        ),
    )
    logging.basicConfig(handlers=[handler], level=level, force=True)


def get_logger(name: str = _ROOT_LOGGER) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by the stdlib logger *name*.

    Args:
        name: Dotted logger name, normally under ``licexpr``.

    Returns:
        A :class:`structlog.stdlib.BoundLogger` that honors the stdlib
        level and handlers of *name*.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = [
    'configure_logging',
    'get_logger',
]
