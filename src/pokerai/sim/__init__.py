from .deck import Deck
from .game import GameSimulator, SingleGameSimulator
from .worker import run_worker

__all__ = ["Deck", "GameSimulator", "SingleGameSimulator", "run_worker"]
