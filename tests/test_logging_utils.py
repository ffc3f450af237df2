import json
import logging

import structlog

from roguegrid.utils.logging_utils import setup_logging


def test_json_output_emits_one_object_per_event(capsys):
    setup_logging(logging.INFO, json_output=True)
    structlog.get_logger("roguegrid.test").info("Level ready", seed=7)
    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "Level ready"
    assert event["seed"] == 7
    assert event["level"] == "info"


def test_filtering_level_drops_debug_events(capsys):
    setup_logging(logging.INFO, json_output=True)
    structlog.get_logger("roguegrid.test").debug("Turn finished", turn=1)
    assert "Turn finished" not in capsys.readouterr().err


def test_numba_logger_is_kept_quiet_in_verbose_mode():
    setup_logging(logging.DEBUG)
    assert logging.getLogger("numba").level == logging.WARNING
    setup_logging(logging.INFO)
