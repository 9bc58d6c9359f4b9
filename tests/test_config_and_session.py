import json
import logging

from services.session_service import SessionService
from utils import app_config
from utils.log_setup import configure_logging


def test_config_roundtrip_and_removal(tmp_path):
    path = tmp_path / "cfg" / "config.json"
    assert app_config.load_config(path) == {}
    app_config.set_value("db_path", "/tmp/ledger.db", path)
    app_config.set_value("log_level", "debug", path)
    assert app_config.get_value("db_path", config_file=path) == "/tmp/ledger.db"
    app_config.set_value("db_path", None, path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"log_level": "debug"}
    assert not path.with_suffix(".tmp").exists()


def test_corrupt_config_reads_as_empty(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert app_config.load_config(path) == {}
    path.write_text("[1, 2]", encoding="utf-8")
    assert app_config.load_config(path) == {}


def test_session_gate(tmp_path):
    path = tmp_path / "config.json"
    session = SessionService(path)
    assert not session.is_authenticated()
    assert not session.login("wrong")
    assert not session.is_authenticated()
    assert session.login("ledger")
    assert session.is_authenticated()
    session.logout()
    assert not session.is_authenticated()


def test_session_uses_configured_passcode(tmp_path):
    path = tmp_path / "config.json"
    app_config.set_value("passcode", "s3cret", path)
    session = SessionService(path)
    assert not session.login("ledger")
    assert session.login(" s3cret ")


def test_configure_logging_quiets_matplotlib():
    configure_logging("debug")
    assert logging.getLogger("matplotlib").level == logging.WARNING
