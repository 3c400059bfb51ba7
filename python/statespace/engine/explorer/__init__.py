from statespace.engine.explorer.explorer import StateSpaceExplorer, explore

__all__ = ["StateSpaceExplorer", "explore"]
