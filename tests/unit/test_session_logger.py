"""Unit tests for session logging setup."""

import sys

import pytest
from loguru import logger

from cvgen.contexts.rendering.logger import _log_debug, setup_rendering_logger
from cvgen.utils.logger import run_header, setup_session_logger


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_session_log_file_gets_debug_records(tmp_path, restore_logger):
    """Test the log file is created and captures DEBUG records with the header."""
    log_file = setup_session_logger("render", tmp_path / "session", {"Theme": "modern"})
    logger.debug("detail only in the file")

    assert log_file == tmp_path / "session" / "render.log"
    content = log_file.read_text(encoding="utf-8")
    assert "Theme: modern" in content
    assert "detail only in the file" in content


@pytest.mark.unit
def test_context_wrapper_prefixes_messages(tmp_path, restore_logger):
    """Test context log helpers tag their messages."""
    log_file = setup_rendering_logger(tmp_path, "academic")
    _log_debug("theme resolved")

    content = log_file.read_text(encoding="utf-8")
    assert "[render] theme resolved" in content
    assert "Theme: academic" in content


@pytest.mark.unit
def test_run_header_includes_extras():
    """Test provenance extras follow the standard lines."""
    lines = run_header({"API": "http://localhost:8080"})

    assert lines[0].startswith("Command: ")
    assert lines[-1] == "API: http://localhost:8080"
