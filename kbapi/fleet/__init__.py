"""Fleet: agents, policies, integrations and the infrastructure they talk to."""
from .agent_policies import AgentPolicies
from .agents import AgentActions, Agents
from .epm import EPM
from .hosts import BinaryDownloadSources, Proxies, ServerHosts
from .internal import DataStreams, Internal
from .keys import EnrollmentAPIKeys, MessageSigningService, ServiceTokens, UninstallTokens
from .outputs import Outputs
from .package_policies import PackagePolicies


class Fleet:

    def __init__(self, api) -> None:
        self.agents = Agents(api)
        self.agent_actions = AgentActions(api)
        self.agent_policies = AgentPolicies(api)
        self.binary_download_sources = BinaryDownloadSources(api)
        self.data_streams = DataStreams(api)
        self.enrollment_api_keys = EnrollmentAPIKeys(api)
        self.epm = EPM(api)
        self.internal = Internal(api)
        self.message_signing_service = MessageSigningService(api)
        self.outputs = Outputs(api)
        self.package_policies = PackagePolicies(api)
        self.proxies = Proxies(api)
        self.server_hosts = ServerHosts(api)
        self.service_tokens = ServiceTokens(api)
        self.uninstall_tokens = UninstallTokens(api)


__all__ = ["Fleet"]
