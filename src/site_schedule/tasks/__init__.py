"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, ...) + payload parsing
- task_store.py: in-memory collection (replace / apply_patch / all)
- task_state.py: status/progress edit rules (permissive by default)
- task_api.py: HTTP gateway to the dashboard API (httpx)
- notifier.py: in-process "changed elsewhere" hub
- refresh_loop.py: asyncio polling loop for periodic full refreshes
"""
