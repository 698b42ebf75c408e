"""Where the demo keeps its files."""

from dataclasses import dataclass, field
from pathlib import Path
from tempfile import TemporaryDirectory

from platformdirs import user_data_dir

APP_NAME = "Typeahead"


def _default_data_dir() -> Path:
    return Path(user_data_dir(appname=APP_NAME, appauthor=False))


@dataclass
class AppDirs:
    """Demo data directory. Saved settings and logs live inside it."""

    app_data_dir: Path = field(default_factory=_default_data_dir)
    _temp_dir: TemporaryDirectory | None = field(default=None, repr=False)

    @property
    def app_config_path(self) -> Path:
        return self.app_data_dir / "config.json"

    @property
    def app_log_path(self) -> Path:
        return self.app_data_dir / "logs" / "typeahead.log"

    def use_temp_app_data_dir(self) -> None:
        """Keep data in a temporary directory removed at exit (`--temp`)."""
        self._temp_dir = TemporaryDirectory(prefix="typeahead-")
        self.app_data_dir = Path(self._temp_dir.name)


app_dirs = AppDirs()
