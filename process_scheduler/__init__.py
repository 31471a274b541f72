"""
Process scheduler package.

Simulates CPU scheduling policies (FCFS, SJF, Priority, Round Robin) over a
fixed set of processes and reports a Gantt timeline plus per-process metrics.
"""

__all__ = ["cli"]
