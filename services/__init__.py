"""
Titan Circuits Services

Application services shared by the engine and its collaborators.
"""

from services.event_bus import EventBus

__all__ = ["EventBus"]
