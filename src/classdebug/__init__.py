"""Print the declared members of a class, private ones included."""

__version__ = "0.1.0"
