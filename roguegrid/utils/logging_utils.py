import logging
from typing import List

import structlog
from structlog.stdlib import add_log_level, add_logger_name
from structlog.typing import Processor

# Third-party loggers that flood DEBUG output (numba logs every compile pass).
NOISY_LOGGERS = ("numba",)


def _processors(json_output: bool) -> List[Processor]:
    shared: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_logger_name,
        add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
    ]
    if json_output:
        # One JSON object per event, tracebacks included as structured data.
        return shared + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return shared + [structlog.dev.ConsoleRenderer(colors=True)]


def setup_logging(level: int = logging.INFO, json_output: bool = False) -> None:
    """Configure structlog over stdlib logging for generation runs.

    Console output is colored key/value lines; ``json_output`` switches to one
    JSON object per event so level summaries can be piped into other tools.
    Safe to call more than once: the last call wins.
    """
    logging.basicConfig(level=level, format="%(message)s", force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    structlog.reset_defaults()
    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
