# src/infraresize/cli/resize.py
"""
Implements the `resize` commands for the infraresize CLI.
"""

import asyncio
import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.exceptions import InfraResizeError
from ..core.k8s_client import connect
from ..core.machine_pools import MachinePoolClient
from ..core.orchestrator import MUTATING_PHASES, ResizeOrchestrator
from ..models.plan import ResizePlan
from ..notifications.service_log import ServiceLogSender
from ..reporters.plan_reporter import PlanReporter
from ..resize.catalog import InstanceSizeCatalog
from ..resize.transformer import PoolSpecTransformer
from ..watchers.node_watcher import NodeReadinessWatcher
from ..watchers.pool_watcher import PoolLifecycleWatcher

logger = logging.getLogger(__name__)

app = typer.Typer(help="Resize a cluster's node pools.", add_completion=False)

INFRA_HELP = """
Resize a cluster's infra nodes.

Automates the "machinepool dance": a temporary infra machinepool at the new
instance type doubles capacity, the original pool is deleted, a permanent
pool at the new instance type is created and the temporary pool is deleted.

Examples:

  # Automatically vertically scale infra nodes to the next size
  infraresize resize infra --cluster-id ${CLUSTER_ID}

  # Resize infra nodes to a specific instance type
  infraresize resize infra --cluster-id ${CLUSTER_ID} --instance-type r5.xlarge
"""


def build_orchestrator(clients, reporter: PlanReporter, assume_yes: bool, poll_interval: float,
                       timeout: float) -> ResizeOrchestrator:
    """Wires the campaign components on top of connected API clients."""
    pools = MachinePoolClient(clients.hive_core, clients.hive_custom, clients.hive_admin_custom)
    catalog = InstanceSizeCatalog.from_csv(config.INSTANCE_CATALOG_PATH)

    def confirm(plan: ResizePlan) -> bool:
        reporter.report_plan(plan)
        if assume_yes:
            return True
        return typer.confirm("Continue?", default=False)

    return ResizeOrchestrator(
        pools=pools,
        node_watcher=NodeReadinessWatcher(clients.cluster_core, poll_interval, timeout),
        pool_watcher=PoolLifecycleWatcher(pools, poll_interval, timeout),
        transformer=PoolSpecTransformer(catalog, temp_suffix=config.TEMP_POOL_SUFFIX),
        notifier=ServiceLogSender(),
        confirm=confirm,
        on_manual_notification=reporter.report_manual_notification,
    )


async def _run_infra(
    cluster_id: str,
    instance_type: Optional[str],
    assume_yes: bool,
    poll_interval: float,
    timeout: float,
    reporter: PlanReporter,
) -> int:
    try:
        clients = await connect(config.CLUSTER_KUBE_CONTEXT, config.HIVE_KUBE_CONTEXT, config.HIVE_ADMIN_KUBE_CONTEXT)
    except InfraResizeError as e:
        logger.error(f"Failed to initialize Kubernetes clients: {e}")
        reporter.report_failure("init", e, mutated=False)
        return 1

    orchestrator = None
    try:
        orchestrator = build_orchestrator(clients, reporter, assume_yes, poll_interval, timeout)
        plan = await orchestrator.run(cluster_id, instance_type)
        if plan is None:
            typer.echo("exiting")
        return 0
    except InfraResizeError as e:
        phase = orchestrator.phase if orchestrator else None
        logger.error(f"Infra resize failed: {e}")
        reporter.report_failure(phase.value if phase else "init", e, mutated=phase in MUTATING_PHASES)
        return 1
    finally:
        await clients.close()


@app.command("infra", help=INFRA_HELP)
def infra(
    cluster_id: Annotated[
        str,
        typer.Option("--cluster-id", "-C", help="OCM internal cluster id to resize infra nodes for."),
    ],
    instance_type: Annotated[
        Optional[str],
        typer.Option("--instance-type", help="(optional) Instance type to resize the infra nodes to."),
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt.")] = False,
    poll_interval: Annotated[
        Optional[float],
        typer.Option("--poll-interval", min=0.1, help="Seconds between checks while waiting on the cluster."),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", min=1.0, help="Seconds each wait may take before the resize is abandoned."),
    ] = None,
) -> None:
    """
    Resize a cluster's infra nodes.
    """
    poll_interval = poll_interval if poll_interval is not None else config.POLL_INTERVAL_SECONDS
    timeout = timeout if timeout is not None else config.WAIT_TIMEOUT_SECONDS
    if poll_interval > timeout:
        raise typer.BadParameter("--poll-interval must not exceed --timeout.")

    reporter = PlanReporter()
    exit_code = asyncio.run(_run_infra(cluster_id, instance_type, yes, poll_interval, timeout, reporter))
    raise typer.Exit(code=exit_code)
