"""
Task Tracker API - Tasks Module

Owner-scoped task CRUD.
"""

from tasktracker.tasks.router import router as tasks_router

__all__ = ["tasks_router"]
