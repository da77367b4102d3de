"""
Core utilities — exceptions and cross-cutting concerns shared by the
API client, paginator, controller and CLI.
"""
