from pydantic import Field
from .base import BaseModel, executor_function
from .errors import UpstreamUnavailable, format_upstream_error
from .client import ClientOptions, WiktionaryClient
from .logger import build_logger

__all__ = (
    "BaseModel",
    "Field",
    "ClientOptions",
    "WiktionaryClient",
    "UpstreamUnavailable",
    "format_upstream_error",
    "build_logger",
    "executor_function",
)
