from .loader import load_config
from .schema import ReservaConfig

__all__ = ['load_config', 'ReservaConfig']
