import pytest

from fantasy_story.characters import Character
from fantasy_story.containers import BoundedContainer, Container
from fantasy_story.exceptions import CapacityExceeded, ItemAlreadyHeld, ItemSpent, NotFound
from fantasy_story.items import Potion, Weapon


def weapon(name, damage=1):
    w = Weapon(name, damage)
    w.setup()
    return w


def test_add_then_find_returns_same_item():
    box = Container()
    items = [weapon("Sword"), weapon("Axe"), weapon("Bow")]
    for item in items:
        box.add(item)
    for item in items:
        assert box.find(item.name) is item
        assert box.contains(item)
        assert item in box
        assert item.name in box


def test_find_miss_raises_and_get_returns_none():
    box = Container()
    with pytest.raises(NotFound):
        box.find("Nothing")
    assert box.get("Nothing") is None


def test_add_overwrites_on_name_collision():
    box = Container()
    old, new = weapon("Sword", 1), weapon("Sword", 9)
    box.add(old)
    box.add(new)
    assert len(box) == 1
    assert box.find("Sword") is new


def test_remove_by_item_and_by_name():
    box = Container()
    a, b = weapon("A"), weapon("B")
    box.add(a)
    box.add(b)
    assert box.remove(a) is a
    assert box.remove("B") is b
    assert len(box) == 0


def test_remove_missing_fails_and_leaves_container_unchanged():
    box = Container()
    with pytest.raises(NotFound):
        box.remove("Ghost")
    with pytest.raises(NotFound):
        box.remove(weapon("Ghost"))

    box.add(weapon("Sword"))
    with pytest.raises(NotFound):
        box.remove("Ghost")
    with pytest.raises(NotFound):
        box.remove(weapon("Ghost"))
    assert box.names() == ["Sword"]


def test_iteration_is_in_name_order():
    box = Container()
    for name in ("Mace", "Axe", "Sword"):
        box.add(weapon(name))
    assert [i.name for i in box] == ["Axe", "Mace", "Sword"]


@pytest.mark.parametrize("capacity", [0, 1, 3])
def test_bounded_container_rejects_add_past_capacity(capacity):
    box = BoundedContainer(capacity)
    for i in range(capacity):
        box.add(weapon(f"W{i}"))
    before = box.names()
    with pytest.raises(CapacityExceeded):
        box.add(weapon("Extra"))
    assert box.names() == before
    assert box.is_full()
    assert box.space_left() == 0


def test_full_bounded_container_rejects_overwrite_too():
    box = BoundedContainer(1)
    original = weapon("Sword", 1)
    box.add(original)
    with pytest.raises(CapacityExceeded):
        box.add(weapon("Sword", 5))
    assert box.find("Sword") is original


def test_negative_capacity_is_invalid():
    with pytest.raises(ValueError):
        BoundedContainer(-1)


def test_show_is_lazy_restartable_and_read_only():
    box = BoundedContainer(3)
    box.add(weapon("Sword", 10))
    listing = box.show()
    assert list(listing) == ["Sword:10"]
    assert list(listing) == ["Sword:10"]
    box.add(weapon("Axe", 4))
    assert list(listing) == ["Axe:4", "Sword:10"]
    assert listing.line() == "Axe:4 Sword:10"
    assert len(box) == 2


def test_spent_item_leaves_its_container():
    box = BoundedContainer(2)
    elixir = Potion("Elixir", 15)
    elixir.setup()
    box.add(elixir)
    drinker = Character("Aria", 10)
    elixir.use(drinker, drinker)
    assert "Elixir" not in box
    assert len(box) == 0
    with pytest.raises(ItemSpent):
        box.find("Elixir")
    with pytest.raises(NotFound):
        box.remove("Elixir")

    fresh = Potion("Elixir", 5)
    fresh.setup()
    box.add(fresh)
    assert box.find("Elixir") is fresh


def test_removed_item_no_longer_releases_from_container():
    box = Container()
    elixir = Potion("Elixir", 1)
    elixir.setup()
    box.add(elixir)
    box.remove("Elixir")
    other = Potion("Elixir", 2)
    other.setup()
    box.add(other)
    c = Character("C", 1)
    elixir.use(c, c)
    assert box.find("Elixir") is other


def test_item_cannot_sit_in_two_containers():
    first, second = BoundedContainer(2), BoundedContainer(2)
    elixir = Potion("Elixir", 5)
    elixir.setup()
    first.add(elixir)
    with pytest.raises(ItemAlreadyHeld):
        second.add(elixir)
    assert len(second) == 0

    drinker = Character("Aria", 10)
    elixir.use(drinker, drinker)
    assert list(first.show()) == []


def test_item_can_move_after_removal():
    first, second = Container(), Container()
    sword = weapon("Sword")
    first.add(sword)
    first.add(sword)
    assert len(first) == 1
    second.add(first.remove("Sword"))
    assert second.find("Sword") is sword
