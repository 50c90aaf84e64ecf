"""Parser configuration module"""

from .parser_config import (
    ParserConfig,
    load_env_file,
    load_parser_config,
)

__all__ = [
    "ParserConfig",
    "load_env_file",
    "load_parser_config",
]
