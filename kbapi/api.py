"""The Kibana API: one object holding the transport and every endpoint namespace."""
from .alerting import Alerting
from .apm import APM
from .base import BaseAPI
from .cases import Cases
from .connectors import Connectors
from .data_views import DataViews
from .endpoint import Endpoint
from .fleet import Fleet
from .logstash import Logstash
from .ml import ML
from .roles import Roles
from .saved_objects import SavedObjects
from .security_ai_assistant import SecurityAIAssistant
from .security_detections import SecurityDetections
from .security_endpoint_management import SecurityEndpointManagement
from .security_exceptions import SecurityExceptions
from .short_url import ShortURLs
from .spaces import Spaces
from .status import Status
from .task_manager import TaskManager
from .transport import Transport
from .uptime import Uptime


class API(BaseAPI):
    """Entry point for every Kibana call.

    ``api.spaces.get(...)``, ``api.fleet.agent_policies.list(...)`` and so on;
    every method is a coroutine returning an :class:`~kbapi.response.APIResponse`.
    """

    def __init__(self, transport: Transport) -> None:
        super().__init__(transport)
        self.alerting = Alerting(self)
        self.apm = APM(self)
        self.cases = Cases(self)
        self.connectors = Connectors(self)
        self.data_views = DataViews(self)
        self.endpoint = Endpoint(self)
        self.fleet = Fleet(self)
        self.logstash = Logstash(self)
        self.ml = ML(self)
        self.roles = Roles(self)
        self.saved_objects = SavedObjects(self)
        self.security_ai_assistant = SecurityAIAssistant(self)
        self.security_detections = SecurityDetections(self)
        self.security_endpoint_management = SecurityEndpointManagement(self)
        self.security_exceptions = SecurityExceptions(self)
        self.short_url = ShortURLs(self)
        self.spaces = Spaces(self)
        self.status = Status(self)
        self.task_manager = TaskManager(self)
        self.uptime = Uptime(self)


def new(transport: Transport) -> API:
    return API(transport)
