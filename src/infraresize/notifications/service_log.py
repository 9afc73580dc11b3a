# src/infraresize/notifications/service_log.py
"""
Customer notification sent once the infra nodes run on the new instance type.

The notification is a managed-notifications JSON template rendered with
KEY=VALUE parameters and posted to the OCM service log API. When posting is
not possible the operator gets the equivalent osdctl command instead.
"""

import logging
import re
import shlex
from typing import Any, Dict, List

import httpx

from ..core.config import config
from ..core.exceptions import NotificationError
from ..models.notification import ServiceLog
from ..utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)

SERVICE_LOG_PATH = "/api/service_logs/v1/cluster_logs"
_PLACEHOLDER = re.compile(r"\$\{([A-Za-z0-9_]+)\}")
_HTTP_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


def build_service_log(instance_type: str, cluster_id: str, template: str = None) -> ServiceLog:
    """Builds the 'infra nodes resized' service log for a cluster."""
    return ServiceLog(
        cluster_id=cluster_id,
        template=template or config.SERVICE_LOG_TEMPLATE_URL,
        template_params=[f"INSTANCE_TYPE={instance_type}"],
    )


def manual_command(service_log: ServiceLog) -> str:
    """Renders the osdctl command an operator can run to send the service log by hand."""
    parts = ["osdctl", "servicelog", "post", service_log.cluster_id, "-t", service_log.template]
    for param in service_log.template_params:
        parts.extend(["-p", param])
    return shlex.join(parts)


def parse_template_params(params: List[str]) -> Dict[str, str]:
    parsed = {}
    for param in params:
        key, sep, value = param.partition("=")
        if not sep or not key:
            raise NotificationError(f"invalid template parameter '{param}', expected KEY=VALUE")
        parsed[key] = value
    return parsed


def render_template(template: Any, params: Dict[str, str]) -> Any:
    """
    Substitutes ${KEY} placeholders in every string of a JSON template.

    Raises:
        NotificationError: If a placeholder has no matching parameter.
    """
    if isinstance(template, dict):
        return {key: render_template(value, params) for key, value in template.items()}
    if isinstance(template, list):
        return [render_template(value, params) for value in template]
    if not isinstance(template, str):
        return template

    def _substitute(match):
        key = match.group(1)
        if key not in params:
            raise NotificationError(f"template parameter {key} was not provided")
        return params[key]

    return _PLACEHOLDER.sub(_substitute, template)


class ServiceLogSender:
    """Posts service logs to OCM."""

    def __init__(self, ocm_url: str = None, token: str = None):
        self.ocm_url = (ocm_url or config.OCM_URL).rstrip("/")
        self.token = token if token is not None else config.OCM_TOKEN

    async def fetch_template(self, template_url: str) -> Dict[str, Any]:
        # Templates are public; the OCM token never leaves for their host.
        try:
            async with get_async_http_client() as client:
                response = await client.get(template_url)
                response.raise_for_status()
                template = response.json()
        except _HTTP_ERRORS as e:
            raise NotificationError(f"failed to fetch service log template {template_url}: {e}") from e
        except ValueError as e:
            raise NotificationError(f"service log template {template_url} is not valid JSON") from e

        if not isinstance(template, dict):
            raise NotificationError(f"service log template {template_url} is not a JSON object")
        return template

    async def send(self, service_log: ServiceLog) -> Dict[str, Any]:
        """
        Fetches and renders the template, then posts it for the cluster.

        Returns:
            The service log as accepted by OCM.

        Raises:
            NotificationError: On any failure; the caller decides how to degrade.
        """
        if not self.token:
            raise NotificationError("OCM_TOKEN is not set")

        params = parse_template_params(service_log.template_params)
        template = await self.fetch_template(service_log.template)

        body = render_template(template, params)
        body["cluster_id"] = service_log.cluster_id

        logger.info("posting service log '%s' to cluster %s", body.get("summary", ""), service_log.cluster_id)
        try:
            async with get_async_http_client(base_url=self.ocm_url, token=self.token) as client:
                response = await client.post(SERVICE_LOG_PATH, json=body)
                response.raise_for_status()
        except _HTTP_ERRORS as e:
            raise NotificationError(f"failed to post service log for cluster {service_log.cluster_id}: {e}") from e

        try:
            return response.json()
        except ValueError:
            return {}
