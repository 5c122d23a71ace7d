from __future__ import annotations

import importlib

from dotenv import load_dotenv

from timecard.common.logging_setup import configure_logging
from timecard.database.bootstrap import apply_schema
from timecard.database.connection import DatabaseConnection, DBConfig
from timecard.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    count = apply_schema(DatabaseConnection.get_instance(DBConfig.from_mapping(db_config)))
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(statements={count})"
    )


if __name__ == "__main__":
    main()
