from termquest.stats import Attributes, Resources


def test_resources_default_to_zero():
    assert Resources().total() == 0
    assert Resources() == Resources(0, 0, 0)


def test_resources_total_sums_fields():
    res = Resources(health=10, stamina=5, mana=2)
    assert res.total() == res.health + res.stamina + res.mana


def test_attributes_total_sums_fields():
    attrs = Attributes(strength=1, intelligence=2, agility=3, constitution=4, luck=5)
    assert attrs.total() == (
        attrs.strength + attrs.intelligence + attrs.agility + attrs.constitution + attrs.luck
    )


def test_attributes_are_mutable():
    attrs = Attributes()
    attrs.luck = 7
    assert attrs.luck == 7
    assert attrs.total() == 7