"""
Eitango — Entry point
======================
Launch the application.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

# Ensure project root is on the path so absolute imports work when running
# directly with `python main.py`.
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.config import settings
from db.database import open_session


def setup_logging() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger()
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    file_handler = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, settings.LOG_FILE),
        maxBytes=5_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)


def main() -> None:
    setup_logging()
    from ui.app import EitangoApp

    app = EitangoApp(open_session())
    app.mainloop()


if __name__ == "__main__":
    main()
