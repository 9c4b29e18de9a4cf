"""
Log setup for the wikimanifest command.

Output is one line per record, prefixed with the module name, on stdout.
Messages inside a module carry a component tag such as `[Wiki]` or
`[Extract]`, so a run reads as fetch -> extract -> cache -> store.

What shows up at each level:
  DEBUG   - API query parameters, resolved paths, cache entry updates
  INFO    - discovered and processed pages, rows skipped for a known reason
  WARNING - request retries, rows that could not be read at all
  ERROR   - the failure that aborted a run
"""

import logging
import sys

LOG_FORMAT = "[%(name)s] %(message)s"

# HTTP stack loggers; their per-request chatter is noise next to [Wiki]
THIRD_PARTY_LOGGERS = ("urllib3", "requests", "charset_normalizer")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger for a CLI run.

    Unknown level names fall back to INFO with a warning.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stdout, force=True)

    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if resolved == logging.INFO and level.upper() != "INFO":
        logging.getLogger(__name__).warning(f"Unknown log level '{level}', using INFO")
