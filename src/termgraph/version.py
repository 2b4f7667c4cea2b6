"""Version information for :mod:`termgraph`."""

VERSION = "0.1.0"
