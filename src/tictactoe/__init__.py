"""Tic-tac-toe package exposing the game core and the web application."""

from .game import BoardState, GameEngine, Player, TurnResult
from .ui import app

__all__ = ["BoardState", "GameEngine", "Player", "TurnResult", "app"]
