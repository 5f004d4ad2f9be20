"""
配置文件 - Kibana 客户端配置管理

Values come from ``KIBANA_*`` environment variables or a ``.env`` file.
"""
import json
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from typing_extensions import Annotated


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class KibanaSettings(BaseSettings):
    """Kibana 连接配置"""

    # 连接
    url: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["http://localhost:5601"])
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None
    xsrf_header_value: str = "true"
    headers: Annotated[Dict[str, str], NoDecode] = Field(default_factory=dict)

    # TLS
    ca_cert_path: Optional[str] = None
    verify_certs: bool = True

    # 超时与重试
    timeout_seconds: float = 30.0
    retry_on_status: Annotated[List[int], NoDecode] = Field(default_factory=lambda: [502, 503, 504])
    disable_retry: bool = False
    max_retries: int = 3
    retry_backoff_seconds: Optional[float] = None

    # 可观测性
    enable_metrics: bool = False
    enable_debug_logger: bool = False
    tracing_enabled: bool = False
    trace_capture_body: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="KIBANA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("url", mode="before")
    @classmethod
    def _parse_url(cls, v: Any) -> Any:
        """允许 JSON 数组或逗号分隔字符串两种格式。"""
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                return json.loads(s)
            return _split(s)
        return v

    @field_validator("retry_on_status", mode="before")
    @classmethod
    def _parse_statuses(cls, v: Any) -> Any:
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                return json.loads(s)
            return [int(item) for item in _split(s)]
        return v

    @field_validator("headers", mode="before")
    @classmethod
    def _parse_headers(cls, v: Any) -> Any:
        """JSON 对象或 ``Name:value`` 逗号分隔列表。"""
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("{"):
                return json.loads(s)
            headers = {}
            for pair in _split(s):
                name, sep, value = pair.partition(":")
                if not sep:
                    raise ValueError(f"header must be Name:value, got {pair!r}")
                headers[name.strip()] = value.strip()
            return headers
        return v

    @model_validator(mode="after")
    def _validate_auth(self):
        if self.password and not self.username:
            raise ValueError("password is set without a username")
        if not self.url:
            raise ValueError("at least one Kibana url is required")
        return self


@lru_cache()
def get_settings() -> KibanaSettings:
    return KibanaSettings()
