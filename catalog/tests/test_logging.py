import pytest
from catalog.config import set_config_for_test
from catalog.logging import get_logger

@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(log_level="INFO", data_backend="local", catalog_collection="products2")
    yield

def test_records_carry_backend_and_collection():
    """Every record is tagged with the active backend and collection."""
    logger = get_logger("catalog.test")
    lines = []
    logger.add(lines.append, format="{extra[backend]}|{extra[collection]}|{extra[name]}|{message}")
    logger.info("hello")
    assert lines == ["local|products2|catalog.test|hello\n"]

def test_console_level_from_config(capsys):
    set_config_for_test(log_level="WARNING")
    logger = get_logger("catalog.test")
    logger.info("quiet")
    logger.warning("loud")
    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "loud" in out
    assert "local:products2" in out
