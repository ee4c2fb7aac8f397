"""Application layer orchestrating domain use cases."""
