# src/infraresize/reporters/plan_reporter.py
"""
Renders resize plans and operator instructions to the console.
"""

import logging

from rich.console import Console
from rich.table import Table

from ..models.plan import ResizePlan

logger = logging.getLogger(__name__)


class PlanReporter:
    """
    Renders operator-facing output using the 'rich' library.
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def report_plan(self, plan: ResizePlan):
        """Displays the pools a campaign will create and delete."""
        table = Table(title=f"Infra resize plan for cluster {plan.cluster_id}", show_header=True)
        table.add_column("Step", justify="right", style="dim")
        table.add_column("Action", style="bold")
        table.add_column("MachinePool", style="cyan")
        table.add_column("Replicas", justify="right")
        table.add_column("Instance type", style="green")

        original, new_pool, temp_pool = plan.original, plan.new_pool, plan.temp_pool
        table.add_row("1", "create", temp_pool.name, str(temp_pool.replicas), plan.instance_type)
        table.add_row("2", "delete", original.name, str(original.replicas), plan.original_instance_type)
        table.add_row("3", "create", new_pool.name, str(new_pool.replicas), plan.instance_type)
        table.add_row("4", "delete", temp_pool.name, str(temp_pool.replicas), plan.instance_type)

        self.console.print(table)
        self.console.print(
            f"Infra node count will peak at [bold]{plan.double_capacity_target}[/bold] "
            f"and settle back to [bold]{plan.steady_state_target}[/bold]."
        )

    def report_manual_notification(self, command: str):
        self.console.print(
            "Failed to generate service log. Please manually send a service log to the customer with:",
            style="yellow",
        )
        self.console.print(command, markup=False, highlight=False)

    def report_failure(self, phase: str, error: Exception, mutated: bool):
        self.console.print(f"Infra resize failed during phase '{phase}': {error}", style="bold red", markup=False)
        if mutated:
            self.console.print(
                "The cluster was left as it was when the failure happened; nothing was rolled back. "
                "Inspect the infra machinepools and nodes and finish or revert the resize manually.",
                style="yellow",
            )
        else:
            self.console.print("No changes were made to the cluster.", style="yellow")
