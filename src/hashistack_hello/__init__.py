"""
HashiStack hello service: a small FastAPI app that talks to Consul and Vault.
"""

__version__ = "1.0.0"
