"""
Todo API package.

A single-user todo list service (``todo_api.main``) and the client-side view
model that mirrors it (``todo_api.ui``).
"""

__version__ = "0.1.0"
