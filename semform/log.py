# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

import logging
from typing import Any, Final

import rich.logging as rich_logging

LOGGER_NAME: Final[str] = "semform"

_logger: Final = logging.getLogger(LOGGER_NAME)


def debug(msg: str, *args: Any, **kwargs: Any) -> None:
    _logger.debug(msg, *args, stacklevel=2, **kwargs)


def error(msg: str, *args: Any, **kwargs: Any) -> None:
    _logger.error(msg, *args, stacklevel=2, **kwargs)


def exception(msg: str, *args: Any, **kwargs: Any) -> None:
    _logger.exception(msg, *args, stacklevel=2, **kwargs)


def info(msg: str, *args: Any, **kwargs: Any) -> None:
    _logger.info(msg, *args, stacklevel=2, **kwargs)


def logger() -> logging.Logger:
    return _logger


def setup(level: int = logging.INFO, rich_tracebacks: bool = True) -> logging.Handler:
    """Attach a rich console handler to the semform logger."""
    for handler in _logger.handlers:
        if isinstance(handler, rich_logging.RichHandler):
            _logger.setLevel(level)
            return handler
    console_handler = rich_logging.RichHandler(rich_tracebacks=rich_tracebacks, show_time=False)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _logger.addHandler(console_handler)
    _logger.setLevel(level)
    return console_handler


def warning(msg: str, *args: Any, **kwargs: Any) -> None:
    _logger.warning(msg, *args, stacklevel=2, **kwargs)
