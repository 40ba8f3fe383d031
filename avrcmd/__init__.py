"""Line-oriented command interpreter with integer expressions, variables and simulated GPIO ports."""

__version__ = "0.1.0"

__all__ = ["gpio", "interpreter", "parser", "printing", "uart", "variables"]