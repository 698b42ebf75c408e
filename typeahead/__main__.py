"""Application entry point."""

import argparse
import shutil
from pathlib import Path

from .app.app import TypeaheadApp
from .app.app_config import AppConfig
from .common.app import app_dirs
from .common.logger import setup_logger


def reset_all() -> None:
    """Delete the app data directory."""
    if app_dirs.app_data_dir.exists():
        shutil.rmtree(app_dirs.app_data_dir)
        print(f"App data directory deleted: {app_dirs.app_data_dir}")
    else:
        print(f"App data directory does not exist: {app_dirs.app_data_dir}")


def load_config() -> AppConfig:
    """Load the saved config, or the defaults."""
    if not app_dirs.app_config_path.exists():
        return AppConfig()
    return AppConfig.model_validate_json(app_dirs.app_config_path.read_text())


def apply_args(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Override saved settings with command line arguments."""
    updates: dict = {}
    if args.words is not None:
        updates["words_path"] = args.words
    if args.delay is not None:
        updates["debounce_delay_ms"] = args.delay
    if args.latency is not None:
        updates["latency_ms"] = args.latency
    if args.free_text:
        updates["rigid"] = False
    if args.change_immediately:
        updates["change_on_blur"] = False
    return AppConfig.model_validate({**config.model_dump(), **updates})


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Typeahead - pick a word as you type")
    parser.add_argument("--words", type=Path, help="Word list, one per line")
    parser.add_argument("--delay", type=int, help="Debounce delay in milliseconds")
    parser.add_argument("--latency", type=int, help="Simulated data source latency in milliseconds")
    parser.add_argument("--free-text", action="store_true", help="Allow committing arbitrary text")
    parser.add_argument("--change-immediately", action="store_true", help="Commit on every change, not on blur")
    parser.add_argument("--log-level", default="INFO", help="Log level")
    parser.add_argument("--temp", action="store_true", help="Run in temporary mode")
    parser.add_argument("--reset", action="store_true", help="Delete all app data")

    args = parser.parse_args()

    if args.reset:
        reset_all()
        return

    if args.temp:
        app_dirs.use_temp_app_data_dir()

    setup_logger(level=args.log_level, log_file=app_dirs.app_log_path, console_output=False)

    config = apply_args(load_config(), args)
    app = TypeaheadApp(config)
    try:
        app.run()
    finally:
        app_dirs.app_config_path.parent.mkdir(parents=True, exist_ok=True)
        app_dirs.app_config_path.write_text(app.dump_config().model_dump_json(indent=2))


if __name__ == "__main__":
    main()
