"""Infrastructure configuration module."""

from .application_config import Config
from .model_config import DEFAULT_MODEL_CONFIG, ModelConfig, get_config

__all__ = ["Config", "DEFAULT_MODEL_CONFIG", "ModelConfig", "get_config"]
