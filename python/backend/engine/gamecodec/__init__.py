from backend.engine.gamecodec.codec import PARAM_NAME, PuzzleCodec

__all__ = ["PARAM_NAME", "PuzzleCodec"]
