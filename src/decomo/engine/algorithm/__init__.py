from .config import MOEADConfig, MOEADConfigData
from .moead import MOEAD

__all__ = ["MOEAD", "MOEADConfig", "MOEADConfigData"]
