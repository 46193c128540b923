"""
Infrastructure package.

Adapters for the database, external services, notifications, realtime
fan-out and monitoring.
"""
