"""Tk widgets for the orders shell; rendering and callbacks only."""
