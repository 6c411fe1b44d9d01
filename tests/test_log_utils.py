import logging

import pytest

from wanderword.log_utils import configure_logging, get_log_file, tail_log


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_log_file_in_home(isolated_home):
    assert get_log_file() == isolated_home / "debug.log"


def test_configure_writes_debug_to_file(tmp_path, restore_root_logger):
    log_file = configure_logging(tmp_path / "logs" / "debug.log")
    logging.getLogger("wanderword.test").debug("traced coffee")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "traced coffee" in log_file.read_text(encoding="utf-8")


def test_repeated_configure_does_not_stack_handlers(tmp_path, restore_root_logger):
    configure_logging(tmp_path / "debug.log")
    configure_logging(tmp_path / "debug.log")
    assert len(logging.getLogger().handlers) == 2


def test_tail_log(tmp_path):
    log_file = tmp_path / "debug.log"
    log_file.write_text("".join(f"line {i}\n" for i in range(30)))
    lines = tail_log(log_file, lines=3)
    assert lines == ["line 27\n", "line 28\n", "line 29\n"]


def test_tail_missing_log(tmp_path):
    assert tail_log(tmp_path / "absent.log") == []
