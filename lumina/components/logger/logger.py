import logging

from lumina.components.logger.logger_interface import LoggerInterface

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Logger(LoggerInterface):
    def __init__(self, log_format: str = DEFAULT_LOG_FORMAT, log_level: str = "INFO"):
        self.log_format = log_format
        self.log_level = log_level.upper()

        root = logging.getLogger()
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(self.log_format))
            root.addHandler(handler)
        root.setLevel(self.log_level)

    def get_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(self.log_level)
        return logger
