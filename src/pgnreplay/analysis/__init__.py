"""Game analysis APIs."""

from pgnreplay.analysis.service import Evaluator, PlyEvaluation, evaluate_game

__all__ = ["Evaluator", "PlyEvaluation", "evaluate_game"]
