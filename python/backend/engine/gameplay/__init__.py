from backend.engine.gameplay.game import (
    GamePlay,
    MoveResult,
    apply_move,
    is_adjacent,
    is_solved,
    target_for_direction,
)

__all__ = [
    "GamePlay",
    "MoveResult",
    "apply_move",
    "is_adjacent",
    "is_solved",
    "target_for_direction",
]
