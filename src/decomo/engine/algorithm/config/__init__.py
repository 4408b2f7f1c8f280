from .moead import MOEADConfig, MOEADConfigData

__all__ = ["MOEADConfig", "MOEADConfigData"]
