"""Game entities consumed by the equip event rules."""
