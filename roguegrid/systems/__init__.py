from roguegrid.systems.movement import try_move

__all__ = ["try_move"]
