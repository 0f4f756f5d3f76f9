"""
Logging config: from env (LoggerConfig.from_env()) or from a dict validated
by the pydantic schemas.
"""
from hierlog.config.schema import HandlerSchema, LoggerSchema, LoggingSchema
from hierlog.config.settings import LoggerConfig

__all__ = [
    "LoggerConfig",
    "LoggingSchema",
    "LoggerSchema",
    "HandlerSchema",
]
