from __future__ import annotations

import logging

_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # httpx logs every request at INFO
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)
    # failed token refreshes are reported at ERROR regardless of verbosity
    logging.getLogger("beds24_client").setLevel(level)
