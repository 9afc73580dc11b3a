# src/infraresize/__init__.py
"""
infraresize: vertical resize of a managed cluster's infra MachinePool.
"""

__version__ = "0.3.0"
