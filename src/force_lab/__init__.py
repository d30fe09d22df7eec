"""force-lab: step-wise physical simulation of 2-D graph layouts."""

__version__ = "0.3.0"
