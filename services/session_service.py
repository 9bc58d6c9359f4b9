import logging
from pathlib import Path

from utils import app_config
from utils.constants import DEFAULT_PASSCODE

logger = logging.getLogger(__name__)


class SessionService:
    """Local access gate: a flag in the bootstrap config, nothing more."""

    def __init__(self, config_file: Path | None = None):
        self._config_file = config_file

    def is_authenticated(self) -> bool:
        return app_config.get_value("authenticated", False, self._config_file) is True

    def login(self, passcode: str) -> bool:
        expected = app_config.get_value("passcode", DEFAULT_PASSCODE, self._config_file)
        if (passcode or "").strip() != expected:
            logger.info("Rejected unlock attempt")
            return False
        app_config.set_value("authenticated", True, self._config_file)
        return True

    def logout(self):
        app_config.set_value("authenticated", None, self._config_file)
