"""Core systems: event bus, topics and equip event dispatch."""
