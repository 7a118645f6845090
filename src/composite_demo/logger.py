# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Iterator
from types import TracebackType
from typing import Any

import contextlib
import logging
import traceback

from pythonjsonlogger.jsonlogger import JsonFormatter as _JsonFormatter

from dom import DomError

_SysExcInfoType = (
    tuple[type[BaseException], BaseException, TracebackType | None] | tuple[None, None, None]
)

_ERROR_FIELDS = ("argument", "depth", "limit")


class JsonFormatter(_JsonFormatter):
    def formatException(self, ei: _SysExcInfoType) -> dict[str, Any] | None:  # type: ignore[override]
        exc_type, exc_value, exc_traceback = ei
        if exc_type is None or exc_value is None:
            return None

        trace = traceback.extract_tb(exc_traceback)

        formatted: dict[str, Any] = {
            "type": exc_type.__name__,
            "message": str(exc_value),
            "traceback": [
                {
                    "source": f"{frame.filename}:{frame.lineno}",
                    "method": frame.name,
                    "code": frame.line,
                }
                for frame in reversed(trace)
            ],
            "cause": (
                self.formatException(
                    (
                        type(exc_value.__cause__),
                        exc_value.__cause__,
                        exc_value.__cause__.__traceback__,
                    ),
                )
                if exc_value.__cause__
                else None
            ),
        }

        if isinstance(exc_value, DomError):
            formatted.update(
                {key: getattr(exc_value, key) for key in _ERROR_FIELDS if hasattr(exc_value, key)},
            )

        return formatted


_LOGGERS = ("composite_demo", "dom")


@contextlib.contextmanager
def configured(*, local: bool = False, level: int = logging.INFO) -> Iterator[logging.Handler]:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(json_indent=2 if local else None))  # type: ignore[no-untyped-call]
    handler.setLevel(level)

    loggers = [logging.getLogger(name) for name in _LOGGERS]
    previous = [logger.level for logger in loggers]

    for logger in loggers:
        logger.addHandler(handler)
        logger.setLevel(level)

    try:
        yield handler
    finally:
        for logger, old_level in zip(loggers, previous):
            logger.removeHandler(handler)
            logger.setLevel(old_level)
