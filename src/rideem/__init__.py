"""
rideem API client.

Components:
- core/models.py: value types (Code, Response, Outcome)
- core/ports.py: Transport protocol
- transport/http.py: httpx transport + response decoding
- api/task.py: deferred, repeatable Task
- api/client.py: RideemClient (operation builders, worker pool)
"""

from .api.client import RideemClient
from .api.task import Task
from .core.models import Code, Outcome, Response

__all__ = ["Code", "Outcome", "Response", "RideemClient", "Task"]
