"""ViewModel package for UI state and command surfaces.

Call context:
    ``fazaa/app/main.py`` imports concrete viewmodels from this package to bind
    view callbacks to controller intents.

Responsibilities:
    - Project controller snapshots into view-facing DTOs.
    - Forward user intents to the order list controller.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
