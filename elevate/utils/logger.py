# utils/logger.py

import logging.config


def configure_logging(config) -> None:
    """Применить словарь логирования из AppConfig (консоль + RotatingFileHandler)"""
    if config.log_to_file:
        config.log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(config.get_logging_config())
