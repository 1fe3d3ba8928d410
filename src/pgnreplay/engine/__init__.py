"""External evaluator client."""

from pgnreplay.engine.uci import (
    EngineError,
    EngineSettings,
    UciEvaluator,
    parse_score,
)

__all__ = ["EngineError", "EngineSettings", "UciEvaluator", "parse_score"]
