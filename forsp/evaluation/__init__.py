from forsp.evaluation.evaluator import apply_value, compute, evaluate

__all__ = ["apply_value", "compute", "evaluate"]
