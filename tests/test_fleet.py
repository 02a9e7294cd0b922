from broadside.battleship import Orientation
from broadside.fleet import Fleet


def test_standard_fleet() -> None:
    fleet = Fleet()
    assert [s.size for s in fleet] == [5, 4, 3, 3, 2]
    assert [s.id for s in fleet] == [1, 2, 3, 4, 5]
    for ship in fleet:
        assert not ship.placed
        assert ship.hits == 0
        assert not ship.sunk
        assert ship.orientation is Orientation.HORIZONTAL


def test_rotate_only_while_unplaced() -> None:
    fleet = Fleet()
    assert fleet.rotate_ship(2)
    assert fleet.get(2).orientation is Orientation.VERTICAL
    assert fleet.rotate_ship(2)
    assert fleet.get(2).orientation is Orientation.HORIZONTAL

    fleet.get(2).placed = True
    assert not fleet.rotate_ship(2)
    assert fleet.get(2).orientation is Orientation.HORIZONTAL


def test_rotate_unknown_ship() -> None:
    assert not Fleet().rotate_ship(42)


def test_register_hit_is_monotonic_and_sinks_once() -> None:
    fleet = Fleet()
    cruiser = fleet.get(3)
    outcomes = [fleet.register_hit(3) for _ in range(cruiser.size)]
    assert outcomes == ["hit", "hit", "sunk"]
    assert cruiser.hits == 3
    assert cruiser.sunk

    # Further hits on a sunk ship are refused and change nothing
    assert fleet.register_hit(3) is None
    assert cruiser.hits == 3
    assert cruiser.sunk


def test_register_hit_unknown_ship() -> None:
    assert Fleet().register_hit(99) is None


def test_all_sunk_covers_every_ship() -> None:
    fleet = Fleet([("Cruiser", 3), ("Destroyer", 2), ("Patrol", 2), ("Tug", 2), ("Skiff", 2), ("Extra", 2)])
    for ship in fleet.ships[:-1]:
        for _ in range(ship.size):
            fleet.register_hit(ship.id)
    # A sixth ship still afloat keeps the fleet alive
    assert not fleet.all_sunk()
    assert fleet.remaining() == 1
    fleet.register_hit(6)
    fleet.register_hit(6)
    assert fleet.all_sunk()

