"""Keep a Consul agent's service catalog in step with labeled Docker containers."""

__version__ = "0.1.0"
