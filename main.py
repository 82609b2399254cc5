from __future__ import annotations

from pathlib import Path

from loguru import logger

from app.viewmodels.main_vm import MainVM
from infrastructure.logging import init_logging
from infrastructure.selfie_store import SelfieStore
from infrastructure.settings import AppSettings, JsonSettings

BASE_DIR = Path(__file__).parent


def load_app_settings(path: Path | None = None) -> AppSettings:
    """Read `settings.json` if present, otherwise use defaults."""
    path = path or BASE_DIR / "settings.json"
    if not path.exists():
        return AppSettings()
    return AppSettings.from_settings(JsonSettings(path))


def build_store(app_settings: AppSettings) -> SelfieStore:
    """Create the one store instance shared by every consumer."""
    return SelfieStore(
        app_settings.documents_dir,
        jpeg_quality=app_settings.jpeg_quality,
        cache_capacity=app_settings.image_mem_cache,
    )


def main() -> int:
    app_settings = load_app_settings()
    init_logging(app_settings.log_dir, app_settings.log_level)

    store = build_store(app_settings)
    vm = MainVM(
        store,
        default_sort=app_settings.default_sort,
        new_title=app_settings.new_selfie_title,
    )
    if not vm.load_selfies():
        logger.error(vm.last_error)
        return 1

    logger.info("Journal at {} holds {} selfies", store.documents_dir, vm.selfie_count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
