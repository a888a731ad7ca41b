"""Configuration loading for the equip event rules."""
