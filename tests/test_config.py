# tests/test_config.py
import json
import logging

import pytest
from pydantic import ValidationError

from variant_engine.core.config import Settings
from variant_engine.core.logging import JsonFormatter, get_logger, setup_logging
from variant_engine.services import variant_service


def test_settings_defaults(monkeypatch):
    for key in ("BARCODE_PREFIX", "SKU_SEGMENT_LENGTH", "FILTER_ALL_SENTINEL"):
        monkeypatch.delenv(key, raising=False)
    s = Settings()
    assert s.BARCODE_PREFIX == "123456789"
    assert s.SKU_SEGMENT_LENGTH == 3
    assert s.FILTER_ALL_SENTINEL == "all"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("barcode_suffix_length", "8")
    monkeypatch.setenv("LOW_STOCK_THRESHOLD", "3")
    s = Settings()
    assert s.BARCODE_SUFFIX_LENGTH == 8
    assert s.LOW_STOCK_THRESHOLD == 3


@pytest.mark.parametrize("key, value", [("BARCODE_PREFIX", "ABC123"), ("SKU_SEGMENT_LENGTH", "0"), ("BARCODE_MAX_ATTEMPTS", "-1")])
def test_settings_invalidos(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValidationError):
        Settings()


def test_json_formatter_includes_extra():
    record = logging.makeLogRecord(
        {"name": "variant_engine.variants", "levelname": "INFO", "msg": "Bulk update applied", "updated": 2}
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Bulk update applied"
    assert payload["logger"] == "variant_engine.variants"
    assert payload["extra"] == {"updated": 2}


def test_setup_logging_sets_level(logging_state):
    setup_logging("warning")
    assert get_logger("variant_engine").level == logging.WARNING
    setup_logging("debug")
    assert get_logger("variant_engine").level == logging.DEBUG


def test_regenerate_logs_at_info_after_setup(logging_state, caplog):
    setup_logging("INFO")
    logging.getLogger().addHandler(caplog.handler)
    with caplog.at_level("INFO", logger="variant_engine.variants"):
        result = variant_service.regenerate({"Color": ["Red", "Blue"]}, [])

    assert len(result.combinations) == 2
    record = next(r for r in caplog.records if r.getMessage() == "Variant combinations regenerated")
    assert record.created_count == 2
    assert record.kept_count == 0
    assert record.dropped_count == 0
    payload = json.loads(JsonFormatter().format(record))
    assert payload["extra"]["total_count"] == 2


def test_bulk_update_logs_at_info_after_setup(logging_state, caplog):
    setup_logging("INFO")
    logging.getLogger().addHandler(caplog.handler)
    combos = variant_service.regenerate({"Size": ["S"]}, []).combinations
    with caplog.at_level("INFO", logger="variant_engine.variants"):
        result = variant_service.apply_bulk_update(combos, {combos[0].id, "ZZZ"}, {"price": 4})

    assert result[0].price == 4
    assert "Bulk update applied" in caplog.text
