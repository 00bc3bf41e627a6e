"""
rollbar-payload - builds Rollbar error-reporting payloads
"""

__version__ = "1.0.0"

import logging

from .builder import NotifyBuilder, encode_payload
from .config import BuilderConfig, config_from_env, load_config
from .errors import ConfigError, NotifierError, PayloadEncodingError, PayloadError
from .fingerprinting import fingerprint
from .trace import PythonThrowable, StackFrame, Throwable

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NotifyBuilder",
    "encode_payload",
    "BuilderConfig",
    "load_config",
    "config_from_env",
    "NotifierError",
    "ConfigError",
    "PayloadError",
    "PayloadEncodingError",
    "fingerprint",
    "Throwable",
    "PythonThrowable",
    "StackFrame",
]
