"""Functions trigger sync.

Publishes a function host's triggers, routing metadata and secrets to the
scale controller so it can dispatch and autoscale the app without parsing
the host's function definitions itself.
"""

__version__ = "0.1.0"
