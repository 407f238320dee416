from river_hex.hex_engine.hex_coord import CoordKind, HexCoord


def test_plain_is_default_kind():
    coord = HexCoord.plain(2, 5)
    assert coord.kind is CoordKind.PLAIN
    assert coord.score == 0
    assert coord.guards == ()
    assert coord.as_tuple() == (2, 5)


def test_add_translates_and_keeps_score():
    template = HexCoord.scored(-1, 1, 3)
    moved = template + HexCoord.plain(4, 2)
    assert moved == HexCoord.scored(3, 3, 3)

    assert HexCoord.plain(1, 1) + (2, -1) == HexCoord.plain(3, 0)


def test_bridge_keeps_guards_when_translated():
    guards = (HexCoord.plain(0, -1), HexCoord.plain(1, -1))
    template = HexCoord.bridge(1, -2, 6, guards)
    moved = template + HexCoord.plain(3, 3)
    assert moved.is_bridge
    assert moved.as_tuple() == (4, 1)
    assert moved.score == 6
    # guards are not translated by the addition itself
    assert moved.guards == guards


def test_kinds_compare_unequal():
    assert HexCoord.plain(1, 1) != HexCoord.scored(1, 1, 0)
    assert HexCoord.scored(1, 1, 4).with_score(9).score == 9
