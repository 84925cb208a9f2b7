from .flask_config import Config, TestConfig
from .logger_config import setup_logger
from .tax_config import TaxDefaults


__all__ = [
    #FlaskConfig
    "Config",
    "TestConfig",

    #Logger Config
    "setup_logger",

    #Tax Config
    "TaxDefaults",
]
