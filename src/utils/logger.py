import inspect
import logging
import os

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "numbers"


def _caller_location(depth: int = 2) -> str:
    """Return "file:line" for the frame `depth` levels above this helper."""
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "unknown:0"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


class Logger(logging.LoggerAdapter):
    """
    Process-wide JSON logger.

    Keyword arguments passed to the log methods are emitted as top-level JSON
    fields, e.g. ``logger.info("Brand submitted", org_id=org.id)``.
    """

    _instance = None
    _initialized = False

    def __new__(cls) -> "Logger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if Logger._initialized:
            return

        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

        handler = logging.StreamHandler()
        handler.setFormatter(
            jsonlogger.JsonFormatter(
                "%(asctime)s %(levelname)s %(message)s",
                rename_fields={"asctime": "@timestamp", "levelname": "log_level"},
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

        base = logging.getLogger(LOGGER_NAME)
        base.setLevel(level)
        base.addHandler(handler)
        base.propagate = False

        super().__init__(base)
        Logger._initialized = True

    def error(self, msg: str, *args: tuple, **kwargs: dict) -> None:
        """Log at ERROR with the caller's file and line attached."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(
        self, msg: str, *args: tuple, exc_info: bool = True, **kwargs: dict
    ) -> None:
        """Log at ERROR with traceback and the caller's file and line attached."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        # Reserved logging kwargs pass through; everything else becomes `extra`
        passthrough = {
            key: kwargs.pop(key)
            for key in ("exc_info", "stack_info", "stacklevel")
            if key in kwargs and kwargs[key] is not None
        }
        if kwargs:
            passthrough["extra"] = kwargs
        return msg, passthrough


logger = Logger()
