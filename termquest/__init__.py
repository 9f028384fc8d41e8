"""Game logic for a terminal dungeon crawler: dice, luck, maps, abilities, gear and save files."""

__version__ = "1.0.0"