"""
logging_config.py

Налаштування логера "descentopt".

Модулі пакета пишуть у logging.getLogger("descentopt"); ця функція лише
додає обробники: консоль (INFO) та, за потреби, файл з ротацією (DEBUG).

Приклад використання:
    from descentopt.logging_config import setup_logging

    logger = setup_logging(log_file="run.log")
    logger.info("Запуск оптимізації.")
"""

import logging
import logging.handlers

LOGGER_NAME = "descentopt"


def setup_logging(log_file=None, quiet: bool = False, level=logging.DEBUG):
    logger = logging.getLogger(LOGGER_NAME)

    # Повторний виклик не дублює обробники
    if logger.handlers:
        if quiet:
            logger.handlers = [h for h in logger.handlers
                               if type(h) is not logging.StreamHandler]
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=5_000_000, backupCount=0, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
