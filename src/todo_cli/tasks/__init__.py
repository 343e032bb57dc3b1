"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, NewTask, TaskChanges)
- validation.py: pure checks from raw user input to validated values
- task_store.py: SQLite-backed storage + query/update helpers
- task_format.py: terminal rendering of tasks
"""
