"""Batched text embeddings with provider-driven rate-limit backoff."""

__version__ = "0.1.0"
