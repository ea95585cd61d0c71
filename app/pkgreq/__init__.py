"""pkgreq - install Octave Forge, File Exchange and URL requirements.

Resolves a requirements list into one directory per package and builds
the search path that makes those packages loadable.
"""

__version__ = "0.3.0"
