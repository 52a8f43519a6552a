"""Local JSON file holding the studio's business settings."""

import json
import logging
from pathlib import Path
from typing import Optional

from proposalgen.core.config import get_settings
from proposalgen.models import BusinessSettings

logger = logging.getLogger(__name__)


class BusinessSettingsStore:
    """
    Reads and writes business settings as pretty-printed JSON.

    The file uses the keys businessName, businessEmail and businessPhone.
    """

    def __init__(self, path: Optional[str] = None):
        """Initialize store; path defaults to SETTINGS_PATH."""
        self._path = Path(path) if path else None

    @property
    def path(self) -> Path:
        """Lazy resolve the settings file path."""
        if self._path is None:
            self._path = Path(get_settings().SETTINGS_PATH)
        return self._path

    def load(self) -> BusinessSettings:
        """Load settings, returning empty settings when no file exists yet."""
        if not self.path.exists():
            return BusinessSettings()

        data = json.loads(self.path.read_text(encoding="utf-8"))
        return BusinessSettings(**data)

    def save(self, settings: BusinessSettings) -> Path:
        """Persist settings and return the file path."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(settings.model_dump(by_alias=True), indent=2),
            encoding="utf-8"
        )
        logger.info(f"Business settings saved: {self.path}")
        return self.path

    def is_configured(self) -> bool:
        """True once a business name has been saved."""
        return bool(self.load().name)


# Singleton instance
settings_store = BusinessSettingsStore()
