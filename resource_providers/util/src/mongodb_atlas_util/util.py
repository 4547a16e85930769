"""
Logging helpers shared by the Resource Providers
"""
import logging
from dataclasses import asdict, is_dataclass
from typing import Any

from .config import HandlerConfig

REDACTED = "****"
SECRET_FIELDS = frozenset({"PrivateKey"})


def setup_logging(logger: logging.Logger, config: HandlerConfig) -> logging.Logger:
    """
    Applies the configured log level to a provider's root logger

    All loggers in the provider package inherit from this logger, so this is called once on handler entry.

    :param logger: The provider's root logger
    :param config: Handler configuration
    :return: The same logger
    """
    logger.setLevel(config.log_level)
    return logger


def redact(model: Any) -> Any:
    """
    Returns a log-safe copy of a resource model with secret fields masked

    :param model: A dataclass model, mapping, list or scalar
    :return: Plain python structure safe to pass to a logger
    """
    if model is None:
        return None
    if is_dataclass(model) and not isinstance(model, type):
        model = asdict(model)
    if isinstance(model, dict):
        return {
            key: (REDACTED if key in SECRET_FIELDS and value else redact(value))
            for key, value in model.items()
        }
    if isinstance(model, (list, tuple)):
        return [redact(item) for item in model]
    return model
