"""
Description command parsing.

Components:
- scanner.py: bottom-up walk over CRLF-separated lines
- commands.py: command grammar and its effects on a task
- dates.py: date shortcuts and the free text fallback
- extraction.py: load / scan / flush subtasks / save
"""
