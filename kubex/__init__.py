"""kubex - a simple Kubernetes context manager"""

__version__ = "0.1.0"
