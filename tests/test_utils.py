import logging

from calckit.utils import is_finite_real, reset_logging, setup_logging, within_tolerance


def test_within_tolerance():
    assert within_tolerance(0.1 + 0.2, 0.3)
    assert within_tolerance(1e-13, 0)
    assert not within_tolerance(1.0, 1.001)
    assert within_tolerance(1.0, 1.001, rel_tolerance=1e-2)


def test_is_finite_real():
    assert is_finite_real(3)
    assert is_finite_real(-2.5)
    assert not is_finite_real(True)
    assert not is_finite_real("3")
    assert not is_finite_real(float("nan"))
    assert not is_finite_real(float("-inf"))
    assert not is_finite_real(10**400)
    assert is_finite_real(10**300)


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "calckit.log"
    setup_logging("DEBUG", str(log_file))
    logging.getLogger("calckit.test").debug("hello")
    reset_logging()
    assert "[DEBUG] calckit.test - hello" in log_file.read_text()


def test_setup_logging_replaces_previous_handler():
    setup_logging("WARNING")
    logger = setup_logging("WARNING")
    assert logger.name == "calckit"
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_setup_logging_leaves_root_logger_alone():
    root_handlers = logging.getLogger().handlers[:]
    setup_logging("INFO")
    assert logging.getLogger().handlers == root_handlers
