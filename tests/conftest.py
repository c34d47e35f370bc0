import pytest
from loguru import logger

from trainingkit.calendar import WorkCalendar


@pytest.fixture
def log_records():
    """Messages logged by trainingkit at WARNING and above during the test."""
    records: list[str] = []
    logger.enable("trainingkit")
    sink_id = logger.add(lambda msg: records.append(msg.record["message"]), level="WARNING")
    try:
        yield records
    finally:
        logger.remove(sink_id)
        logger.disable("trainingkit")


@pytest.fixture
def work_week():
    """Mon–Fri, no holidays."""
    return WorkCalendar()


@pytest.fixture
def holi():
    """Mon–Fri with Holi (Monday 2025-03-31) as a one-off holiday."""
    return WorkCalendar(holidays=[{"date": "2025-03-31", "name": "Holi"}])
