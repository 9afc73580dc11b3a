class InfraResizeError(Exception):
    """Base exception for infraresize."""

    pass


class ConfigurationError(InfraResizeError):
    """Raised when the cluster or the request cannot be resized as asked. Always raised before any mutation."""

    pass


class AmbiguousOrMissingNamespace(ConfigurationError):
    """Raised when the cluster identifier does not resolve to exactly one Hive namespace."""

    pass


class InfraPoolNotFound(ConfigurationError):
    """Raised when the cluster namespace holds no MachinePool for the infra pool."""

    pass


class UnsupportedPlatform(ConfigurationError):
    """Raised when a MachinePool has neither an AWS nor a GCP platform block."""

    pass


class UnsupportedInstanceType(ConfigurationError):
    """Raised when the catalog has no next size for an instance type."""

    def __init__(self, provider: str, instance_type: str):
        self.provider = provider
        self.instance_type = instance_type
        super().__init__(f"resizing {provider} instance type {instance_type} not supported")


class UnsupportedReplicaCount(ConfigurationError):
    """Raised when a MachinePool has no fixed replica count, e.g. an autoscaling pool."""

    def __init__(self, pool_name: str, replicas=None):
        self.pool_name = pool_name
        self.replicas = replicas
        super().__init__(
            f"machinepool {pool_name} has replicas={replicas}, a fixed replica count of at least 1 is required"
        )


class ControlPlaneError(InfraResizeError):
    """Raised when a list, get, create or delete call against the control plane fails."""

    pass


class PoolNotFound(ControlPlaneError):
    """Raised when a MachinePool does not exist."""

    pass


class WaitTimedOut(InfraResizeError):
    """Raised when a watcher exceeds its time budget."""

    def __init__(self, operation: str, timeout: float, last_observation=None):
        self.operation = operation
        self.timeout = timeout
        self.last_observation = last_observation
        super().__init__(
            f"timed out after {timeout:g}s waiting for {operation} (last observed: {last_observation})"
        )


class NotificationError(InfraResizeError):
    """Raised when the customer notification could not be sent."""

    pass
