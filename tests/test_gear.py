import pytest

from termquest.gear import (
    MAX_GEARS,
    Gear,
    GearId,
    GearTable,
    GearTableError,
    GearType,
    parse_gear_line,
)
from termquest.stats import Attributes, Resources

HEADER = "id,type,key,health,stamina,mana,str,int,agi,con,luck,count,abilities\n"


def _rows(n):
    return [f"{i},{i % len(GearType)},GEAR_{i},1,2,3,4,5,6,7,8,0\n" for i in range(n)]


def test_gear_id_enum_matches_source_order():
    table = GearTable.from_lines([HEADER, *_rows(MAX_GEARS)])
    assert len(table) == len(GearId)
    assert table[GearId.IRON_SWORD].id == 0
    assert table[GearId.AMULET_OF_HEALING_MANA].id == 19
    gear = parse_gear_line("0,8,GREATSWORD,0,0,0,0,0,0,0,0,0", 1)
    assert gear.gear_type is GearType.BOTH_HAND


def test_parse_line_reads_all_fields():
    gear = parse_gear_line("0,6,IRON_SWORD,10,20,30,1,2,3,4,5,1,7\n", 1)
    assert gear.id == 0
    assert gear.gear_type is GearType.MAIN_HAND
    assert gear.key_name == "IRON_SWORD"
    assert gear.local_name == "IRON_SWORD"
    assert gear.resource_bonus == Resources(10, 20, 30)
    assert gear.attribute_bonus == Attributes(1, 2, 3, 4, 5)
    assert gear.ability_ids == (7,)
    assert gear.ability_count == 1


def test_parse_line_multiple_ability_ids():
    gear = parse_gear_line("2,7,IRON_SHIELD,0,0,0,0,0,0,0,0,3,4-5-6\n", 3)
    assert gear.ability_ids == (4, 5, 6)
    assert gear.ability_count == 3


def test_parse_line_without_abilities():
    gear = parse_gear_line("1,6,STEEL_SWORD,0,0,0,0,0,0,0,0,0", 2)
    assert gear.ability_ids == ()


def test_parse_line_uses_localizer():
    gear = parse_gear_line("0,6,IRON_SWORD,0,0,0,0,0,0,0,0,0", 1, str.lower)
    assert gear.local_name == "iron_sword"
    assert gear.key_name == "IRON_SWORD"


def test_wrong_id_is_rejected():
    with pytest.raises(GearTableError, match="should be 0"):
        parse_gear_line("5,6,IRON_SWORD,0,0,0,0,0,0,0,0,0", 1)


@pytest.mark.parametrize("gear_type", ["-1", "9"])
def test_gear_type_out_of_range(gear_type):
    with pytest.raises(GearTableError, match="invalid gear type"):
        parse_gear_line(f"0,{gear_type},IRON_SWORD,0,0,0,0,0,0,0,0,0", 1)


def test_non_integer_field_is_rejected():
    with pytest.raises(GearTableError, match="health"):
        parse_gear_line("0,6,IRON_SWORD,x,0,0,0,0,0,0,0,0", 1)


def test_missing_field_is_rejected():
    with pytest.raises(GearTableError, match="failed to read"):
        parse_gear_line("0,6,IRON_SWORD,0,0,0", 1)


def test_too_few_ability_ids_is_rejected():
    with pytest.raises(GearTableError, match="ability ids"):
        parse_gear_line("0,6,IRON_SWORD,0,0,0,0,0,0,0,0,3,1-2", 1)


def test_blank_line_is_rejected():
    with pytest.raises(GearTableError, match="gear id"):
        parse_gear_line("\n", 1)


def test_table_from_lines_skips_header():
    table = GearTable.from_lines([HEADER, *_rows(3)])
    assert len(table) == 3
    assert [g.id for g in table] == [0, 1, 2]
    assert table[GearId.STEEL_SWORD].key_name == "GEAR_1"


def test_table_reads_at_most_max_gears():
    table = GearTable.from_lines([HEADER, *_rows(MAX_GEARS), "garbage line\n"])
    assert len(table) == MAX_GEARS
    assert table[MAX_GEARS - 1].id == MAX_GEARS - 1


def test_table_missing_gear_raises_key_error():
    table = GearTable.from_lines([HEADER, *_rows(2)])
    assert len(table) == 2
    assert table[GearId.STEEL_SWORD].key_name == "GEAR_1"
    with pytest.raises(KeyError):
        table[GearId.IRON_SHIELD]


def test_table_propagates_line_errors():
    with pytest.raises(GearTableError, match="should be 1"):
        GearTable.from_lines([HEADER, _rows(1)[0], "3,0,X,0,0,0,0,0,0,0,0,0\n"])


def test_load_from_file(tmp_path):
    path = tmp_path / "gear_table.csv"
    path.write_text(HEADER + "".join(_rows(4)), encoding="utf-8")
    table = GearTable.load(path, str.lower)
    assert len(table) == 4
    assert table[3].local_name == "gear_3"
    assert table[3].attribute_bonus == Attributes(4, 5, 6, 7, 8)


def test_load_missing_file(tmp_path):
    with pytest.raises(GearTableError, match="failed to open"):
        GearTable.load(tmp_path / "absent.csv")


def test_update_localization():
    table = GearTable.from_lines([HEADER, *_rows(2)])
    table.update_localization(lambda key: f"<{key}>")
    assert [g.local_name for g in table] == ["<GEAR_0>", "<GEAR_1>"]


def test_update_localization_skips_unnamed_gear():
    gear = Gear(id=0, gear_type=GearType.RING, key_name="RING", local_name=None)
    table = GearTable([gear])
    table.update_localization(str.lower)
    assert table[0].local_name is None