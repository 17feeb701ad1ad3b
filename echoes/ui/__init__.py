"""Interaction surfaces: the terminal and a scripted stand-in."""

from echoes.ui.base import GameUI
from echoes.ui.console import ConsoleUI
from echoes.ui.scripted import ScriptedUI

__all__ = ["GameUI", "ConsoleUI", "ScriptedUI"]
