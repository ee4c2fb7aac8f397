"""Notification dispatch engine package.

Turns raised domain events into persisted, channel-specific notifications.
"""
