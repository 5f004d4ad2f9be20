"""Task manager health."""
from typing import Any, Dict, Optional

from .base import Namespace
from .models import KibanaModel
from .response import APIResponse
from .transport import RequestOption


class TaskManagerStats(KibanaModel):
    capacity_estimation: Optional[Dict[str, Any]] = None
    configuration: Optional[Dict[str, Any]] = None
    runtime: Optional[Dict[str, Any]] = None
    workload: Optional[Dict[str, Any]] = None


class TaskManagerHealth(KibanaModel):
    id: Optional[str] = None
    last_update: Optional[str] = None
    status: Optional[str] = None
    timestamp: Optional[str] = None
    stats: Optional[TaskManagerStats] = None


class TaskManager(Namespace):

    async def health(self, *options: RequestOption) -> APIResponse[TaskManagerHealth]:
        return await self._api.perform(
            "task_manager.health", "GET", "/api/task_manager/_health",
            result=TaskManagerHealth, options=options,
        )
