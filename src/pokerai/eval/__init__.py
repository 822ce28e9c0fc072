from .lut_evaluator import TensorLUTHandEvaluator

__all__ = ["TensorLUTHandEvaluator"]
