from .runner import GameRunner

__all__ = ["GameRunner"]
