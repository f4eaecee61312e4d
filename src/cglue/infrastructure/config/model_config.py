#!/usr/bin/env python3

"""Configuration of the binding model: export prefix and builtin types."""

import os
from dataclasses import dataclass, field

# Default configuration values
DEFAULT_CONFIG = {
    # Prefix of every exported C symbol
    "CPREFIX": "cglue_",
    # Name of the receiver parameter of instance methods ("" derives it from the prefix)
    "RECEIVER_NAME": "",
    # Comma separated builtin types registered in every root scope
    "DEFAULT_TYPES": "uint64,int,uint,int64,bool,double,float,void,char,size_t",
}

DEFAULT_TYPE_NAMES: tuple[str, ...] = tuple(DEFAULT_CONFIG["DEFAULT_TYPES"].split(","))

# Builtins whose C spelling differs from their model name
BUILTIN_CNAMES: dict[str, str] = {
    "uchar": "unsigned char",
    "c_string": "char *",
    "const_c_string": "const char *",
}


def get_config() -> dict:
    """Get model configuration with environment variable overrides.

    Every key of DEFAULT_CONFIG can be overridden by ``CGLUE_<KEY>``.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key in config:
        env_value = os.getenv(f"CGLUE_{key}")
        if env_value is not None:
            config[key] = env_value.strip()

    return config


@dataclass(frozen=True)
class ModelConfig:
    """Settings shared by every entity below one root scope."""

    cprefix: str = DEFAULT_CONFIG["CPREFIX"]
    receiver_name: str | None = None
    default_type_names: tuple[str, ...] = DEFAULT_TYPE_NAMES
    builtin_cnames: dict[str, str] = field(default_factory=lambda: dict(BUILTIN_CNAMES))

    @property
    def receiver(self) -> str:
        """Name of the receiver parameter prepended to instance methods."""
        return self.receiver_name or f"{self.cprefix}obj"

    @classmethod
    def from_env(cls) -> "ModelConfig":
        """Create a model configuration from ``CGLUE_*`` environment variables."""
        config = get_config()
        type_names = tuple(
            name.strip() for name in config["DEFAULT_TYPES"].split(",") if name.strip()
        )
        return cls(
            cprefix=config["CPREFIX"],
            receiver_name=config["RECEIVER_NAME"] or None,
            default_type_names=type_names,
        )


DEFAULT_MODEL_CONFIG = ModelConfig()
