from .exploration_run import ExplorationRun  # noqa: F401

__all__ = ["ExplorationRun"]
