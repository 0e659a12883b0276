from .loader import load_config
from .models import GatehouseConfig, PolicyConfig

__all__ = [
    "GatehouseConfig",
    "PolicyConfig",
    "load_config",
]
