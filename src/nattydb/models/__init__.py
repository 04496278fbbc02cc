from .config import Config
from .definitions import DefinitionsFile
from .endpoint import DEFAULT_METHOD, EndpointConfig, EndpointDefinition

__all__ = ["DEFAULT_METHOD", "Config", "DefinitionsFile", "EndpointConfig", "EndpointDefinition"]
