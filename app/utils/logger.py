import logging
import sys

from app.config import settings


def setup_logging():
    """Настройка базового логирования для всего приложения."""
    logging.basicConfig(
        level=settings.logging.LEVEL.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
