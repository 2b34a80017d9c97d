"""
vectorstores — Vector Store Clients
===================================

    errors.py        InvalidOptionsError, RequestError
    chroma/          Chroma option resolution and store wrapper
    azureaisearch/   Azure AI Search option resolution and REST helpers
"""
from .errors import InvalidOptionsError, RequestError, VectorStoreError

__all__ = ["InvalidOptionsError", "RequestError", "VectorStoreError"]
