from .configuration import ConfigurationRoot
from .errors import (
    ArgumentError,
    ConfigurationError,
    FormatError,
    SecurityRejectionError,
    StrataError,
)
from .keys import KEY_DELIMITER, combine_path
from .sources import (
    CommandLineSource,
    ConfigurationSource,
    EnvironmentVariablesSource,
    IniFileSource,
    JsonFileSource,
    MemorySource,
    XmlFileSource,
    YamlFileSource,
    source_for_path,
)
from .store import FlatStore

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "CommandLineSource",
    "ConfigurationError",
    "ConfigurationRoot",
    "ConfigurationSource",
    "EnvironmentVariablesSource",
    "FlatStore",
    "FormatError",
    "IniFileSource",
    "JsonFileSource",
    "KEY_DELIMITER",
    "MemorySource",
    "SecurityRejectionError",
    "StrataError",
    "XmlFileSource",
    "YamlFileSource",
    "combine_path",
    "source_for_path",
]
