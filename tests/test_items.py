import pytest

from fantasy_story.characters import Character
from fantasy_story.exceptions import AlreadySetUp, ItemSpent, PreconditionNotMet
from fantasy_story.items import ItemState, Potion, Spell, SpellKind, Weapon


def ready(item):
    item.setup()
    return item


def test_weapon_damages_target_and_stays_ready():
    user, target = Character("Aria", 100), Character("Dummy", 20)
    sword = ready(Weapon("Sword", 10))
    outcome = sword.use(user, target)
    assert target.hp == 10
    assert user.hp == 100
    assert outcome.amount == -10
    assert not outcome.spent
    assert sword.state is ItemState.READY
    sword.use(user, target)
    assert target.hp == 0


def test_potion_heals_and_is_spent_after_one_use():
    user = Character("Aria", 50)
    elixir = ready(Potion("Elixir", 15))
    assert elixir.usable_once
    outcome = elixir.use(user, user)
    assert user.hp == 65
    assert outcome.spent
    assert elixir.state is ItemState.SPENT
    with pytest.raises(ItemSpent):
        elixir.use(user, user)
    assert user.hp == 65


def test_spell_respects_allowed_targets():
    caster, dummy, bystander = Character("Merlin", 40), Character("Dummy", 20), Character("Bob", 30)
    fireball = ready(Spell("Fireball", ["Dummy"], power=12))
    with pytest.raises(PreconditionNotMet):
        fireball.use(caster, bystander)
    assert (caster.hp, bystander.hp) == (40, 30)
    assert fireball.state is ItemState.READY

    fireball.use(caster, dummy)
    assert dummy.hp == 8
    assert fireball.state is ItemState.SPENT


def test_healing_spell():
    caster, ally = Character("Merlin", 40), Character("Ally", 5)
    mend = ready(Spell("Mend", ["Ally"], kind=SpellKind.HEAL, power=20, usable_once=False))
    mend.use(caster, ally)
    mend.use(caster, ally)
    assert ally.hp == 45


def test_setup_runs_once_and_is_required():
    spell = Spell("Bolt", ["A", "B", "A"])
    assert spell.allowed_targets == frozenset()
    with pytest.raises(PreconditionNotMet):
        spell.use(Character("X", 1), Character("A", 1))
    spell.setup()
    assert spell.allowed_targets == frozenset({"A", "B"})
    with pytest.raises(AlreadySetUp):
        spell.setup()


def test_item_formatting():
    assert str(ready(Weapon("Sword", 10))) == "Sword:10"
    assert str(ready(Potion("Elixir", 15))) == "Elixir:15"
    assert str(ready(Spell("Fireball", ["A", "B"]))) == "Fireball:2"


def test_name_is_required_and_read_only():
    with pytest.raises(ValueError):
        Weapon("", 1)
    sword = Weapon("Sword", 1)
    with pytest.raises(AttributeError):
        sword.name = "Axe"  # type: ignore[misc]
