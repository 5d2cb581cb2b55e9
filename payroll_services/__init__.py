"""Integration layer: transport-neutral surface over the roster engine."""

from payroll_services.operation_surface import OperationResponse, RosterOperationSurface

__all__ = ["OperationResponse", "RosterOperationSurface"]
