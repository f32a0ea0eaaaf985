"""depnav: browse a module dependency graph one neighborhood at a time."""

__version__ = "0.1.0"
