# src/infraresize/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- OCM variables ---
        self.OCM_TOKEN = self._get_secret("OCM_TOKEN")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (mounted secret volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/infraresize/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Polling variables ---
    # Every watcher gets its own budget; there is no end-to-end deadline.
    POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "20"))
    WAIT_TIMEOUT_SECONDS = float(os.getenv("WAIT_TIMEOUT_SECONDS", str(20 * 60)))

    # --- Cluster layout variables ---
    INFRA_POOL_NAME = os.getenv("INFRA_POOL_NAME", "infra")
    INFRA_NODE_SELECTOR = os.getenv("INFRA_NODE_SELECTOR", "node-role.kubernetes.io/infra=")
    CLUSTER_ID_LABEL = os.getenv("CLUSTER_ID_LABEL", "api.openshift.com/id")
    TEMP_POOL_SUFFIX = os.getenv("TEMP_POOL_SUFFIX", "2")

    # --- Kubeconfig contexts ---
    # Empty means "current context" (or in-cluster config when no kubeconfig exists).
    CLUSTER_KUBE_CONTEXT = os.getenv("CLUSTER_KUBE_CONTEXT") or None
    HIVE_KUBE_CONTEXT = os.getenv("HIVE_KUBE_CONTEXT") or None
    HIVE_ADMIN_KUBE_CONTEXT = os.getenv("HIVE_ADMIN_KUBE_CONTEXT") or None

    # --- Customer notification variables ---
    OCM_URL = os.getenv("OCM_URL", "https://api.openshift.com")
    SERVICE_LOG_TEMPLATE_URL = os.getenv(
        "SERVICE_LOG_TEMPLATE_URL",
        "https://raw.githubusercontent.com/openshift/managed-notifications/master/osd/infranode_resized_auto.json",
    )

    # --- Instance size catalog ---
    # Optional CSV (provider,current,next) replacing the bundled ladder.
    INSTANCE_CATALOG_PATH = os.getenv("INSTANCE_CATALOG_PATH") or None

    # --- HTTP client variables ---
    DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "5"))
    DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "30"))
    USER_AGENT = os.getenv("USER_AGENT", "infraresize")

    def validate_instance(self):
        if self.POLL_INTERVAL_SECONDS <= 0:
            raise ValueError("POLL_INTERVAL_SECONDS must be greater than 0.")
        if self.WAIT_TIMEOUT_SECONDS <= 0:
            raise ValueError("WAIT_TIMEOUT_SECONDS must be greater than 0.")
        if self.POLL_INTERVAL_SECONDS > self.WAIT_TIMEOUT_SECONDS:
            raise ValueError("POLL_INTERVAL_SECONDS must not exceed WAIT_TIMEOUT_SECONDS.")
        if not self.INFRA_POOL_NAME:
            raise ValueError("INFRA_POOL_NAME must not be empty.")
        if not self.INFRA_NODE_SELECTOR:
            raise ValueError("INFRA_NODE_SELECTOR must not be empty.")
        if not self.TEMP_POOL_SUFFIX:
            raise ValueError("TEMP_POOL_SUFFIX must not be empty.")
        if not self.OCM_TOKEN:
            logging.warning("OCM_TOKEN is not set; customer notifications will need to be sent manually.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
