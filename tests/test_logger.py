"""Tests for the structured logger."""

import json
import logging

import pytest

from todo_scheduler.utils.logger import StructuredLogger, _level_from_name


@pytest.mark.parametrize("name, expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    ("verbose", logging.INFO),
    ("", logging.INFO),
])
def test_level_from_name(name, expected):
    assert _level_from_name(name) == expected


def test_messages_are_json(capsys):
    logger = StructuredLogger("todo_scheduler.tests.json", level=logging.INFO)

    logger.info("Task created", task_id=1)

    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["message"] == "Task created"
    assert payload["task_id"] == 1
    assert payload["level"] == "INFO"
