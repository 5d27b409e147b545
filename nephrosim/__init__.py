"""NephroSim - clinical decision-making simulation game."""

__version__ = "0.1.0"
