from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

Level = Union[int, str]

ROOT_LOGGER = "Cordlink"

# Named groups of Cordlink loggers that can be tuned independently.
LOGGER_GROUPS: dict[str, tuple[str, ...]] = {
    "flow": ("Cordlink.core.bootstrap", "Cordlink.core.login"),
    "rest": ("Cordlink.core.rest", "Cordlink.core.http_utils"),
}

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_FORMAT_WITH_SOURCE = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"


def set_group_level(group: str, level: Level) -> None:
    try:
        names = LOGGER_GROUPS[group]
    except KeyError:
        raise ValueError(f"Unknown logger group: {group!r} (expected one of {sorted(LOGGER_GROUPS)})") from None
    for name in names:
        logging.getLogger(name).setLevel(level)


def configure_logging(
    *,
    level: Level = "INFO",
    flow_level: Optional[Level] = None,
    rest_level: Level = "WARNING",
    with_source: bool = False,
    stream: Optional[TextIO] = None,
    replace_handlers: bool = False,
) -> logging.Logger:
    """Attach a stream handler to the ``Cordlink`` logger and tune its groups.

    Nothing is configured on import; the package only installs a NullHandler.

    The ``flow`` group (bootstrap and login) reports which entry flow ran and
    whether a second factor was needed. It follows ``level`` unless
    ``flow_level`` is given. The ``rest`` group logs one line per HTTP request
    and stays at WARNING unless ``rest_level`` lowers it.

    Credentials, tokens and codes never appear in these records.
    """

    root = logging.getLogger(ROOT_LOGGER)
    if replace_handlers:
        root.handlers.clear()

    has_stream = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_stream:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT_WITH_SOURCE if with_source else _FORMAT))
        root.addHandler(handler)

    root.setLevel(level)
    root.propagate = False

    set_group_level("flow", flow_level if flow_level is not None else level)
    set_group_level("rest", rest_level)
    return root
