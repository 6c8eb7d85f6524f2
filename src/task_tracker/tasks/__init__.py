"""
Task subsystem.

Components:
- task_store.py: SQLite-backed storage for tasks and users
- task_service.py: validation, access rules and the locked in-memory cache
- task_render.py: fixed-width console tables
- task_export.py: iCalendar export of pending tasks
- task_reminders.py: polling loop that reminds about tasks due today
"""
