"""Endpoint response actions (``/api/endpoint``)."""
from typing import Dict, List, Optional

from pydantic import Field

from .base import Namespace, below_299
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class AgentIdsQuery(KibanaModel):
    agent_ids: List[str]


class ActionStatusParams(Params):
    query: Optional[AgentIdsQuery] = None


class GetActionStatusRequest(KibanaModel):
    params: ActionStatusParams = Field(default_factory=ActionStatusParams)


class AgentPendingActions(KibanaModel):
    agent_id: str
    pending_actions: Dict[str, int] = Field(default_factory=dict)


class ActionStatus(KibanaModel):
    data: List[AgentPendingActions] = Field(default_factory=list)


class ListActionsParams(Params):
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")
    commands: Optional[List[str]] = None
    agent_ids: Optional[List[str]] = Field(default=None, alias="agentIds")
    user_ids: Optional[List[str]] = Field(default=None, alias="userIds")
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    agent_types: Optional[str] = Field(default=None, alias="agentTypes")
    with_outputs: Optional[List[str]] = Field(default=None, alias="withOutputs")
    types: Optional[List[str]] = None


class ListActionsRequest(KibanaModel):
    params: ListActionsParams = Field(default_factory=ListActionsParams)


class ResponseAction(KibanaModel):
    id: str
    agents: List[str] = Field(default_factory=list)
    command: str
    agent_type: Optional[str] = Field(default=None, alias="agentType")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    is_expired: bool = Field(default=False, alias="isExpired")
    is_completed: bool = Field(default=False, alias="isCompleted")
    was_successful: bool = Field(default=False, alias="wasSuccessful")
    started_at: Optional[str] = Field(default=None, alias="startedAt")
    completed_at: Optional[str] = Field(default=None, alias="completedAt")


class ResponseActionList(KibanaModel):
    data: List[ResponseAction] = Field(default_factory=list)
    page: int = 0
    page_size: int = Field(default=0, alias="pageSize")
    total: int = 0
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    elastic_agent_ids: Optional[List[str]] = Field(default=None, alias="elasticAgentIds")


class SecurityEndpointManagement(Namespace):

    async def get_action_status(
        self, req: Optional[GetActionStatusRequest] = None, *options: RequestOption
    ) -> APIResponse[ActionStatus]:
        """Pending response actions per agent; ``query`` travels JSON-encoded."""
        req = req or GetActionStatusRequest()
        return await self._api.perform(
            "security_endpoint_management.get_action_status", "GET", "/api/endpoint/action_status",
            params=req.params, result=ActionStatus, success=below_299, options=options,
        )

    async def list_actions(
        self, req: Optional[ListActionsRequest] = None, *options: RequestOption
    ) -> APIResponse[ResponseActionList]:
        req = req or ListActionsRequest()
        return await self._api.perform(
            "security_endpoint_management.list_actions", "GET", "/api/endpoint/action",
            params=req.params, result=ResponseActionList, success=below_299, options=options,
        )
