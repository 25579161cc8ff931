"""taskpad - a command-line task tracker."""

__version__ = "0.1.0"
