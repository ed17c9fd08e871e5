"""Application composition layer for the Tkinter shell.

``main.App`` wires views, view models, adapters, and the order list
controller into a runnable desktop workflow without placing pagination logic
in views.
"""
