"""Game domain services: match rules, room lifecycle and the room registry.

This package contains the domain logic imported by socket handlers and
HTTP routes, keeping transport concerns separated from core game mechanics.
"""
