from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timecard.common.logging_setup import configure_logging
from timecard.database.bootstrap import ensure_demo_users
from timecard.database.connection import DatabaseConnection, DBConfig
from timecard.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config)))
    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
