"""Shared fixtures for task board tests."""

from datetime import date

import pytest

from taskboard.config import BoardConfig
from taskboard.ids import SequentialIds
from taskboard.sample import sample_tasks
from taskboard.server import create_app
from taskboard.store import TaskBoard
from taskboard.validation import FormValidator

TODAY = date(2025, 1, 1)


@pytest.fixture
def board():
    """Empty board with predictable ids and a pinned 'today'."""
    return TaskBoard(
        id_generator=SequentialIds(),
        validator=FormValidator(today=lambda: TODAY),
    )


@pytest.fixture
def sample_board(board):
    board.load(sample_tasks())
    return board


@pytest.fixture
def client(sample_board):
    app = create_app(board=sample_board, config=BoardConfig())
    app.config["TESTING"] = True
    return app.test_client()

