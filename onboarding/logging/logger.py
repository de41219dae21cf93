import logging
import sys

_CONTEXT_ATTR = "onboarding_context"


class _ContextFormatter(logging.Formatter):
    """Appends keyword context (session_id=..., step=...) to the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context: dict[str, object] = getattr(record, _CONTEXT_ATTR, {})
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


class Log:
    """Centralized logging for the onboarding core.

    Keyword arguments passed to any level method are rendered as trailing
    key=value pairs, e.g. ``Log.info("Step advanced", session_id=sid)``.
    """

    _logger: logging.Logger = logging.getLogger("onboarding")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _ContextFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra={_CONTEXT_ATTR: context})

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra={_CONTEXT_ATTR: context})

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra={_CONTEXT_ATTR: context})

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra={_CONTEXT_ATTR: context})
