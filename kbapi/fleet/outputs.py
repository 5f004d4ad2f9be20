"""Fleet outputs: where agents ship their data.

Outputs are polymorphic on ``type``; :data:`Output` resolves a payload to the
matching model on both requests and responses.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field
from typing_extensions import Annotated

from ..base import Namespace, require
from ..models import KibanaModel
from ..response import APIResponse
from ..transport import RequestOption
from .models import IdResult, Item, ItemList

_OUTPUTS = "/api/fleet/outputs"

ELASTICSEARCH = "elasticsearch"
REMOTE_ELASTICSEARCH = "remote_elasticsearch"
LOGSTASH = "logstash"
KAFKA = "kafka"


class OutputSSL(KibanaModel):
    certificate: Optional[str] = None
    certificate_authorities: Optional[List[str]] = None
    key: Optional[str] = None
    verification_mode: Optional[str] = None


class OutputShipper(KibanaModel):
    compression_level: Optional[float] = None
    disk_queue_compression_enabled: Optional[bool] = None
    disk_queue_enabled: Optional[bool] = None
    disk_queue_encryption_enabled: Optional[bool] = None
    disk_queue_max_size: Optional[float] = None
    disk_queue_path: Optional[str] = None
    loadbalance: Optional[bool] = None
    max_batch_bytes: Optional[float] = None
    mem_queue_events: Optional[float] = None
    queue_flush_timeout: Optional[float] = None


class SecretRef(KibanaModel):
    id: str


class _OutputBase(KibanaModel):
    name: str
    hosts: List[str] = Field(default_factory=list)
    id: Optional[str] = None
    is_default: Optional[bool] = None
    is_default_monitoring: Optional[bool] = None
    is_internal: Optional[bool] = None
    is_preconfigured: Optional[bool] = None
    allow_edit: Optional[List[str]] = None
    config_yaml: Optional[str] = None
    ca_sha256: Optional[str] = None
    ca_trusted_fingerprint: Optional[str] = None
    proxy_id: Optional[str] = None
    shipper: Optional[OutputShipper] = None
    ssl: Optional[OutputSSL] = None
    secrets: Optional[Dict[str, Any]] = None


class ElasticsearchOutput(_OutputBase):
    type: Literal["elasticsearch"] = ELASTICSEARCH
    preset: Optional[str] = None


class RemoteElasticsearchOutput(_OutputBase):
    type: Literal["remote_elasticsearch"] = REMOTE_ELASTICSEARCH
    preset: Optional[str] = None
    service_token: Optional[str] = None
    kibana_api_key: Optional[str] = None
    kibana_url: Optional[str] = None
    sync_integrations: Optional[bool] = None


class LogstashOutput(_OutputBase):
    """``hosts`` are ``host:port`` pairs without a scheme."""
    type: Literal["logstash"] = LOGSTASH


class KafkaHash(KibanaModel):
    hash: Optional[str] = None
    random: Optional[bool] = None


class KafkaHeader(KibanaModel):
    key: str
    value: str


class KafkaSASL(KibanaModel):
    mechanism: Optional[str] = None


class KafkaPartitioning(KibanaModel):
    group_events: Optional[float] = None


class KafkaOutput(_OutputBase):
    """``auth_type`` is none, user_pass, ssl or kerberos."""
    type: Literal["kafka"] = KAFKA
    auth_type: Optional[str] = None
    connection_type: Optional[str] = None
    version: Optional[str] = None
    client_id: Optional[str] = None
    compression: Optional[str] = None
    compression_level: Optional[float] = None
    broker_timeout: Optional[float] = None
    timeout: Optional[float] = None
    required_acks: Optional[int] = None
    partition: Optional[str] = None
    random: Optional[KafkaPartitioning] = None
    round_robin: Optional[KafkaPartitioning] = None
    hash: Optional[KafkaHash] = None
    headers: Optional[List[KafkaHeader]] = None
    topic: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    key: Optional[str] = None
    sasl: Optional[KafkaSASL] = None


Output = Annotated[
    Union[ElasticsearchOutput, RemoteElasticsearchOutput, LogstashOutput, KafkaOutput],
    Field(discriminator="type"),
]


class CreateOutputRequest(KibanaModel):
    body: Output


class OutputIdRequest(KibanaModel):
    output_id: str


class UpdateOutputRequest(KibanaModel):
    output_id: str
    body: Output


class OutputHealth(KibanaModel):
    state: Optional[str] = None
    message: Optional[str] = None
    timestamp: Optional[str] = None


class LogstashAPIKey(KibanaModel):
    api_key: str


class Outputs(Namespace):

    async def list(self, *options: RequestOption) -> APIResponse[ItemList[Output]]:
        return await self._api.perform(
            "fleet.outputs.list", "GET", _OUTPUTS, result=ItemList[Output], options=options,
        )

    async def create(self, req: Optional[CreateOutputRequest], *options: RequestOption) -> APIResponse[Item[Output]]:
        require(req)
        return await self._api.perform(
            "fleet.outputs.create", "POST", _OUTPUTS, body=req.body, result=Item[Output], options=options,
        )

    async def get(self, req: Optional[OutputIdRequest], *options: RequestOption) -> APIResponse[Item[Output]]:
        require(req)
        require(req.output_id, "output id is required")
        return await self._api.perform(
            "fleet.outputs.get", "GET", _OUTPUTS + "/{output_id}",
            path_params={"output_id": req.output_id}, result=Item[Output], options=options,
        )

    async def update(self, req: Optional[UpdateOutputRequest], *options: RequestOption) -> APIResponse[Item[Output]]:
        require(req)
        require(req.output_id, "output id is required")
        return await self._api.perform(
            "fleet.outputs.update", "PUT", _OUTPUTS + "/{output_id}",
            path_params={"output_id": req.output_id}, body=req.body, result=Item[Output], options=options,
        )

    async def delete(self, req: Optional[OutputIdRequest], *options: RequestOption) -> APIResponse[IdResult]:
        require(req)
        require(req.output_id, "output id is required")
        return await self._api.perform(
            "fleet.outputs.delete", "DELETE", _OUTPUTS + "/{output_id}",
            path_params={"output_id": req.output_id}, result=IdResult, options=options,
        )

    async def get_health(self, req: Optional[OutputIdRequest], *options: RequestOption) -> APIResponse[OutputHealth]:
        """Latest health reported for a remote Elasticsearch output."""
        require(req)
        require(req.output_id, "output id is required")
        return await self._api.perform(
            "fleet.outputs.health", "GET", _OUTPUTS + "/{output_id}/health",
            path_params={"output_id": req.output_id}, result=OutputHealth, options=options,
        )

    async def generate_logstash_api_key(self, *options: RequestOption) -> APIResponse[LogstashAPIKey]:
        return await self._api.perform(
            "fleet.outputs.logstash_api_key", "POST", "/api/fleet/logstash_api_keys",
            result=LogstashAPIKey, options=options,
        )
