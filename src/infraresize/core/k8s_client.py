import logging
import typing
from dataclasses import dataclass, field

from kubernetes_asyncio import client, config

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


async def get_api_client(context: typing.Optional[str] = None) -> client.ApiClient:
    """
    Returns an ApiClient for the given kubeconfig context.

    Without a context, in-cluster configuration is tried first and the
    current kubeconfig context second. Each call builds its own
    Configuration, so clients for different clusters never share state.

    Raises:
        ConfigurationError: If no configuration could be loaded.
    """
    if context is None:
        try:
            logger.debug("Attempting to load in-cluster Kubernetes config...")
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes configuration.")
            return client.ApiClient(configuration=configuration)
        except config.ConfigException:
            logger.debug("In-cluster config not found.")

    try:
        logger.debug("Attempting to load kubeconfig context %s...", context or "<current>")
        api_client = await config.new_client_from_config(context=context, persist_config=False)
        logger.info("Loaded Kubernetes configuration for context %s.", context or "<current>")
        return api_client
    except (config.ConfigException, OSError) as e:
        raise ConfigurationError(f"could not load Kubernetes configuration for context {context}: {e}") from e


@dataclass
class ClusterClients:
    """
    API handles for one campaign: the managed cluster (nodes) and the Hive
    cluster (namespaces and MachinePools), with an optional elevated Hive
    client used for mutations.
    """

    cluster_core: client.CoreV1Api
    hive_core: client.CoreV1Api
    hive_custom: client.CustomObjectsApi
    hive_admin_custom: client.CustomObjectsApi
    _api_clients: typing.List[client.ApiClient] = field(default_factory=list, repr=False)

    async def close(self):
        """Close every underlying ApiClient."""
        for api_client in self._api_clients:
            await api_client.close()
        self._api_clients.clear()
        logger.debug("Kubernetes API clients closed.")


async def connect(
    cluster_context: typing.Optional[str] = None,
    hive_context: typing.Optional[str] = None,
    hive_admin_context: typing.Optional[str] = None,
) -> ClusterClients:
    """Builds the API clients for a campaign from kubeconfig contexts."""
    opened: typing.List[client.ApiClient] = []
    try:
        cluster_api = await get_api_client(cluster_context)
        opened.append(cluster_api)
        hive_api = await get_api_client(hive_context)
        opened.append(hive_api)
        if hive_admin_context and hive_admin_context != hive_context:
            hive_admin_api = await get_api_client(hive_admin_context)
            opened.append(hive_admin_api)
        else:
            hive_admin_api = hive_api
    except Exception:
        for api_client in opened:
            await api_client.close()
        raise

    return ClusterClients(
        cluster_core=client.CoreV1Api(cluster_api),
        hive_core=client.CoreV1Api(hive_api),
        hive_custom=client.CustomObjectsApi(hive_api),
        hive_admin_custom=client.CustomObjectsApi(hive_admin_api),
        _api_clients=opened,
    )
