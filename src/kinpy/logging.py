import logging
import sys
from typing import Any, Optional

DEFAULT_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"


class Logger:
    """Logger used by kinpy components.

    Wraps a stdlib logger and renders keyword context as ``key=value`` pairs
    after the message, so page numbers, actions and request ids show up in a
    consistent place.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    def __init__(
        self,
        name: str = "kinpy",
        level: int = logging.INFO,
        format_string: Optional[str] = None,
        log_to_console: bool = True,
        log_file: Optional[str] = None,
    ):
        """Initialize the logger.

        Args:
            name: Logger name
            level: Minimum logging level
            format_string: Custom format string for log messages
            log_to_console: Whether to log to stdout
            log_file: Optional file path to log to
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Handlers are attached once per name; application handlers are kept
        if self.logger.handlers:
            return

        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

        if log_to_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    @property
    def name(self) -> str:
        return self.logger.name

    def debug(self, message: str, **context: Any) -> None:
        self._log(self.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self._log(self.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(self.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._log(self.ERROR, message, **context)

    def critical(self, message: str, **context: Any) -> None:
        self._log(self.CRITICAL, message, **context)

    def _log(self, level: int, message: str, **context: Any) -> None:
        """Emit ``message`` with its context appended.

        Args:
            level: Log level
            message: The message to log
            **context: Values rendered as ``key=value`` after the message
        """
        if context:
            context_str = " ".join(f"{key}={value}" for key, value in context.items())
            message = f"{message} - {context_str}"
        self.logger.log(level, message)


class DefaultLogger(Logger):
    """Console logger with the standard kinpy format.

    Every component falls back to one of these, named after the component
    (``kinpy-client``, ``kinpy-pagination``, ...).
    """

    def __init__(
        self,
        name: str = "kinpy",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
    ):
        super().__init__(
            name=name,
            level=level,
            format_string=DEFAULT_FORMAT,
            log_to_console=True,
            log_file=log_file,
        )
