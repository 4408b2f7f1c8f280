"""Algorithm engine: components, configuration and the MOEA/D loop."""

from .algorithm import MOEAD, MOEADConfig, MOEADConfigData

__all__ = ["MOEAD", "MOEADConfig", "MOEADConfigData"]
