"""Version information for OVHcloud Data Python SDK"""

__version__ = "0.1.0"
