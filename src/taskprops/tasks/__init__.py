"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Project, Subtask, PendingSubtask)
- task_store.py: SQLite-backed storage for projects, tasks, tags and subtasks
- colors.py: task color palette lookup
- task_api.py: task creation + property extraction entry points
"""
