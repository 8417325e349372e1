import logging

LOGGER_NAME = "livetv"

_logger = logging.getLogger(LOGGER_NAME)
_logger.addHandler(logging.NullHandler())


def _format(tag: str, message: str) -> str:
  return f"[{tag}] {message}"


def log_debug(tag: str, message: str):
  _logger.debug(_format(tag, message))


def log_info(tag: str, message: str):
  _logger.info(_format(tag, message))


def log_warning(tag: str, message: str):
  _logger.warning(_format(tag, message))


def log_error(tag: str, message: str):
  _logger.error(_format(tag, message))
