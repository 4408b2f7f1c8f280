from .pareto import non_dominated_mask, non_dominated_solutions, pareto_filter

__all__ = ["non_dominated_mask", "non_dominated_solutions", "pareto_filter"]
