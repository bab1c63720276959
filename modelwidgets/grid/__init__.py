from modelwidgets.grid.grid import Grid

__all__ = ["Grid"]
