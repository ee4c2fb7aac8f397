"""Delivery mechanisms exposing the dispatch engine."""
