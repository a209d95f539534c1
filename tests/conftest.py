import logging

import pytest

from runlog.base.config import DIAGNOSTICS_LOGGER_NAME, LogConfig
from runlog.base.stack import clear_execution_stack
from runlog.core.subscriber import LogSubscriber


class ListHandler(logging.Handler):
    """Collects formatted records in memory."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def lines(self) -> list[tuple[str, str]]:
        return [(record.levelname, record.getMessage()) for record in self.records]


class FakeExperiment:
    def __init__(
        self,
        name: str = "my_experiment",
        *,
        run_id: str = "run-1",
        run_key: str = "1a2b3c4d5e6f7a8b",
        variant: str = "",
        variant_names=("red", "blue"),
        context=None,
        log_context: bool = False,
    ) -> None:
        self.name = name
        self.run_id = run_id
        self.run_key = run_key
        self.variant = variant
        self.variant_names = set(variant_names)
        self.context = context if context is not None else {}
        self.log_context = log_context


@pytest.fixture(autouse=True)
def _clean_stacks():
    clear_execution_stack()
    yield
    clear_execution_stack()


@pytest.fixture
def log_handler():
    return ListHandler()


@pytest.fixture
def run_logger(log_handler):
    logger = logging.getLogger("runlog.tests")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(log_handler)
    yield logger
    logger.removeHandler(log_handler)


@pytest.fixture
def diagnostics():
    handler = ListHandler()
    logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)


@pytest.fixture
def plain_config():
    return LogConfig(colorize_logging=False)


@pytest.fixture
def subscriber(run_logger, plain_config):
    return LogSubscriber(logger=run_logger, config=plain_config)


@pytest.fixture
def make_experiment():
    return FakeExperiment
