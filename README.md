# termquest

Game logic for a terminal dungeon crawler. It is a plain Python library and
needs nothing beyond the standard library.

## What it contains

| Module | Contents |
|---|---|
| `termquest.dice` | `Dice` (D3 to D20), `roll_dice(dice, rng)` returns a value from 1 to the number of faces, `check_dice(value)` |
| `termquest.stats` | `Resources` (health, stamina, mana) and `Attributes` (strength, intelligence, agility, constitution, luck), each with `total()` |
| `termquest.luck` | `luck_dice_for(luck)` and `roll_luck_dice(character, rng)`. The die grows with the luck attribute and the result is the roll minus one. |
| `termquest.map` | `Tile`, `Color`, `Vector2D`, `TileAppearance`, the `TILE_APPEARANCE` table and `Map`, a floor whose tiles are stored column by column (`x * height + y`) in a hidden layer and a revealed layer |
| `termquest.map_generator` | `generate_map(map, generate_exit, rng)` carves a maze by depth-first search and knocks through a few walls to make loops. It places a start door, an optional exit door and the floor's contents. |
| `termquest.map_populator` | `populate_map(map, rng)` places a key, the enemies (5 if `enemy_count` is not positive) and a life and a mana fountain. It also has `is_dead_end` and `is_close_to_enemy`. |
| `termquest.map_revealer` | `reveal_map(map, light_radius)` copies the tiles the player can see into the revealed layer. Walls block the view. |
| `termquest.map_parser` | `create_parsed_map(width, height, tiles, player_pos)` returns a `ParsedMap` of `ParsedTile` symbols and colours, with the player drawn as `@` |
| `termquest.ability_usage` | `use_ability(user, target, ability, rng)` and its steps (`consume_resource`, `evaluate_accuracy`, `use_ability_on`, `get_scaler_value`, `damage_target`, `heal_target`) work on `Combatant` and `AbilitySpec` and return a `UsageResult` |
| `termquest.gear` | `GearId`, `GearType`, `Gear`, `parse_gear_line` and `GearTable`, which reads the gear CSV and refreshes its localized names |
| `termquest.save_file_handler` | `SaveSlot`, `GameState`, `PlayerCodec`, `save_game_state`, `load_game_state`, `get_save_infos`, `calculate_checksum`, `save_file_path`, `ensure_save_dir` |

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install ".[test]"
```

## Example: a floor

Every function that uses chance takes an optional `random.Random`. With a
fixed seed it gives the same result each time. Without one, the functions use
the `random` module.

```python
import random

from termquest.map import Map
from termquest.map_generator import generate_map
from termquest.map_revealer import reveal_map
from termquest.map_parser import create_parsed_map

rng = random.Random(42)
floor = Map(width=39, height=19)
generate_map(floor, True, rng)
reveal_map(floor, 3)

view = create_parsed_map(floor.width, floor.height, floor.revealed_tiles, floor.player_pos)
for y in range(view.height):
    print("".join(view.tile_at(x, y).symbol for x in range(view.width)))
```

`generate_map` adjusts dimensions that do not fit:

- If either side is 11 or less, it uses the standard 39 × 19.
- If either side is even, it adds one to both sides.

When `generate_exit` is false, `exit_pos` is set to `(-1, -1)`.

## Example: an ability

Costs, targets and scalers are single characters:

| Field | Codes |
|---|---|
| Resource | `"h"` health, `"s"` stamina, `"m"` mana |
| Target | `"s"` self, `"e"` enemy |
| Effect | `"d"` damage, `"h"` heal |
| Scaler | `"s"`, `"i"`, `"a"`, `"c"`, `"l"` for the five attributes |

```python
from termquest.ability_usage import AbilitySpec, Combatant, UsageResult, use_ability
from termquest.stats import Attributes, Resources

hero = Combatant(Resources(20, 10, 10), Resources(20, 10, 10), Attributes(5, 5, 5, 5, 5))
goblin = Combatant(Resources(8, 5, 0), Resources(8, 5, 0), Attributes(3, 1, 3, 3, 2))
slash = AbilitySpec(c_target="e", r_cost="s", v_cost=2, effect_type="d", r_target="h")

result = use_ability(hero, goblin, slash)
if result is UsageResult.TARGET_DIED:
    print("the goblin falls")
```

## Gear table

`GearTable.load(path, localize)` reads a CSV file with a header line. The
default path is `resources/game_data/gear/gear_table.csv`, relative to the
working directory. At most one row per `GearId` is read.

Each row holds these fields in order:

1. id (it must equal its row number minus one)
2. gear type
3. key name
4. three resource bonuses
5. five attribute bonuses
6. ability count
7. ability ids, joined with `-` when there is more than one

`localize` maps a key name to a display name. Without it, the key name is used
as the display name. `update_localization(localize)` refreshes the names
later.

## Save files

There are five slots, stored as `save_file_1.sav` to `save_file_5.sav`. The
default directory is `save_files`, relative to the working directory, and it is
created when needed. A save file is written in this order:

1. the save time as an ISO timestamp
2. the floor count and active floor
3. every map's header and both of its tile layers
4. the player data
5. a 64-bit checksum

Numbers are little-endian. If the checksum does not match on load, the
mismatch is logged as an error and the load still goes ahead.
`get_save_infos()` returns the timestamp of each slot, or `None` for an empty
slot.

The player data is written, read and checksummed by a `PlayerCodec` subclass
that you supply.

## Errors

| Exception | Raised when |
|---|---|
| `MapGenerationError` | a map cannot be generated or populated |
| `GearTableError` | the gear file cannot be opened or a row is malformed |
| `SaveFileError` | the slot is invalid, a file cannot be opened or written, a save is truncated, or the save directory cannot be created |
| `ValueError` | a required map, tile list or combatant is missing, or a size is not positive |

Invalid codes in an ability are logged, and the ability returns
`UsageResult.UNEXPECTED_ERROR`.

## What it does not do

This package is the game's logic only. It has none of the following:

- no game loop
- no terminal screen, input handling or menus
- no command to run
- no character or enemy definitions
- no experience or leveling
- no translation files

It ships no gear CSV. Character data in save files is left to your
`PlayerCodec`.

## Running the tests

```
pytest
```