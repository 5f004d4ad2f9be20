"""Centralized Logstash pipeline management."""
from typing import List, Optional

from pydantic import Field

from .base import Namespace, below_299, require
from .models import KibanaModel
from .response import APIResponse
from .transport import RequestOption


class PipelineSettings(KibanaModel):
    pipeline_workers: Optional[int] = Field(default=None, alias="pipeline.workers")
    pipeline_batch_size: Optional[int] = Field(default=None, alias="pipeline.batch.size")
    pipeline_batch_delay: Optional[int] = Field(default=None, alias="pipeline.batch.delay")
    pipeline_ecs_compatibility: Optional[str] = Field(default=None, alias="pipeline.ecs_compatibility")
    pipeline_ordered: Optional[bool] = Field(default=None, alias="pipeline.ordered")
    queue_type: Optional[str] = Field(default=None, alias="queue.type")
    queue_max_bytes: Optional[int] = Field(default=None, alias="queue.max_bytes")
    queue_checkpoint_writes: Optional[int] = Field(default=None, alias="queue.checkpoint.writes")


class Pipeline(KibanaModel):
    id: Optional[str] = None
    description: Optional[str] = None
    username: Optional[str] = None
    pipeline: Optional[str] = None
    settings: Optional[PipelineSettings] = None


class PipelineListItem(KibanaModel):
    id: str
    description: Optional[str] = None
    username: Optional[str] = None
    last_modified: Optional[str] = None


class PipelineList(KibanaModel):
    pipelines: List[PipelineListItem] = Field(default_factory=list)


class PipelineBody(KibanaModel):
    pipeline: str
    description: Optional[str] = None
    settings: Optional[PipelineSettings] = None


class LogstashGetPipelineRequest(KibanaModel):
    id: str


class LogstashDeletePipelineRequest(KibanaModel):
    id: str


class LogstashPutPipelineRequest(KibanaModel):
    id: str
    body: PipelineBody


class Logstash(Namespace):

    async def get(self, req: Optional[LogstashGetPipelineRequest], *options: RequestOption) -> APIResponse[Pipeline]:
        require(req)
        require(req.id, "pipeline id is required")
        return await self._api.perform(
            "logstash.get", "GET", "/api/logstash/pipeline/{id}",
            path_params={"id": req.id}, result=Pipeline, options=options,
        )

    async def list(self, *options: RequestOption) -> APIResponse[PipelineList]:
        return await self._api.perform(
            "logstash.list", "GET", "/api/logstash/pipelines",
            result=PipelineList, options=options,
        )

    async def put(self, req: Optional[LogstashPutPipelineRequest], *options: RequestOption) -> APIResponse[None]:
        """Create or replace a pipeline; Kibana answers 204."""
        require(req)
        require(req.id, "pipeline id is required")
        return await self._api.perform(
            "logstash.put", "PUT", "/api/logstash/pipeline/{id}",
            path_params={"id": req.id}, body=req.body, success=below_299,
            options=options,
        )

    async def delete(self, req: Optional[LogstashDeletePipelineRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "pipeline id is required")
        return await self._api.perform(
            "logstash.delete", "DELETE", "/api/logstash/pipeline/{id}",
            path_params={"id": req.id}, success=below_299, options=options,
        )
