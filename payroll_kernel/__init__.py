"""
Payroll Kernel

A small employee payroll roster engine with:
- Field-level and derived-value validation of employee records
- Two explicit validation profiles (strict, activeOnly)
- Whole-roster aggregation, purge and approval gating
- Serialized read-modify-write access to the backing store
"""

__version__ = "0.1.0"
