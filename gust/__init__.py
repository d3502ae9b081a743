"""A small snapshot-based version control system with commits, branches and a command line."""

__version__ = "0.1.0"