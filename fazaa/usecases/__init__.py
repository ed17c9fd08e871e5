"""Use-case layer for the orders list.

Modules coordinate domain objects and ports without performing transport I/O
directly, preserving MVVM + Hexagonal boundaries.
"""
