import random

import pytest

from river_hex import hexPosition
from river_hex.hex_engine.board import HexState, Level, PlayerType
from river_hex.hex_engine.hex_coord import HexCoord


def human_game(size=3, first=HexState.RED):
    return hexPosition(size, PlayerType.HUMAN, PlayerType.HUMAN, Level.EASY, first)


def test_defaults():
    game = hexPosition()
    assert game.size == 7
    assert game.red_player is PlayerType.HUMAN
    assert game.blue_player is PlayerType.COMPUTER
    assert game.level is Level.EASY
    assert game.player is HexState.RED
    assert game.is_empty()
    assert len(game.legal_moves()) == 49


@pytest.mark.parametrize("size, clamped", [(30, 26), (1, 2), (0, 2), (11, 11)])
def test_board_size_is_clamped(size, clamped):
    assert hexPosition(size).size == clamped


def test_unknown_keyword_is_rejected():
    with pytest.raises(TypeError):
        hexPosition(5, colour="red")


def test_human_play_alternates_and_records():
    game = human_game()
    assert game.human_play(0, 0)
    assert game.player is HexState.BLUE
    assert game.human_play(1, 1)
    assert game.red_history == [HexCoord.plain(0, 0)]
    assert game.blue_history == [HexCoord.plain(1, 1)]
    assert game.get_hex_state(1, 1) is HexState.BLUE
    assert game.busy_count() == 2
    assert (0, 0) not in game.legal_moves()


def test_human_play_rejects_bad_cells():
    game = human_game()
    game.human_play(0, 0)
    assert not game.human_play(0, 0)
    assert not game.human_play(3, 0)
    assert not game.human_play(-1, 2)
    assert game.player is HexState.BLUE
    assert game.blue_history == []


def test_human_cannot_play_for_the_computer():
    game = hexPosition(5, PlayerType.COMPUTER, PlayerType.HUMAN)
    assert not game.human_play(0, 0)
    assert game.is_empty()


def test_computer_waits_for_its_turn():
    game = hexPosition(7)
    assert game.computer_play() is None
    assert game.human_play(0, 0)
    move = game.computer_play()
    assert move == HexCoord.plain(3, 3)
    assert game.blue_history == [move]
    assert game.player is HexState.RED


def test_blue_can_open():
    game = hexPosition(5, PlayerType.HUMAN, PlayerType.COMPUTER,
                       first_player=HexState.BLUE, rng=random.Random(1))
    assert game.human_play(2, 2) is False
    assert game.computer_play() == HexCoord.plain(2, 2)
    assert game.player is HexState.RED


def test_match_ends_with_winner_and_path():
    game = human_game()
    for cell in [(1, 0), (0, 0), (1, 1), (0, 1), (1, 2)]:
        assert game.human_play(*cell)
    assert game.ended
    assert game.winner is HexState.RED
    assert game.winning_path == [(1, 0), (1, 1), (1, 2)]
    assert game.player is HexState.NONE
    assert not game.human_play(2, 2)
    assert game.computer_play() is None


def test_blue_column_wins():
    game = human_game()
    for cell in [(0, 0), (0, 2), (1, 0), (1, 2), (2, 1), (2, 2)]:
        assert game.human_play(*cell)
    assert game.is_ended() == (True, HexState.BLUE)
    assert game.winning_path == [(0, 2), (1, 2), (2, 2)]


def test_forced_state_is_seen_by_end_check():
    game = human_game()
    for col in range(3):
        assert game.set_hex_state(1, col, HexState.RED)
    assert not game.set_hex_state(5, 5, HexState.RED)
    assert game.red_history == []
    assert game.is_ended() == (True, HexState.RED)


# ------------------------------------------------------------------
# Restarting
# ------------------------------------------------------------------
def test_restart_refused_mid_match():
    game = human_game()
    game.human_play(0, 0)
    assert not game.can_restart()
    assert game.resized(5) is None
    assert game.one_player() is None
    assert game.two_players() is None
    assert game.reversed_sides() is None


def test_resized_keeps_settings():
    game = hexPosition(7, level=Level.MEDIUM)
    bigger = game.resized(9)
    assert bigger.size == 9
    assert bigger.level is Level.MEDIUM
    assert bigger.blue_player is PlayerType.COMPUTER


def test_one_player_cycles_level():
    game = human_game()
    assert game.one_player().level is Level.EASY
    vs_computer = hexPosition(3, level=Level.EASY)
    medium = vs_computer.one_player()
    assert medium.level is Level.MEDIUM
    assert medium.one_player().level is Level.HARD
    assert medium.one_player().one_player().level is Level.EASY
    assert medium.red_player is PlayerType.HUMAN
    assert medium.blue_player is PlayerType.COMPUTER


def test_two_players():
    game = hexPosition(4).two_players()
    assert game.red_player is PlayerType.HUMAN
    assert game.blue_player is PlayerType.HUMAN


def test_reversed_sides_between_humans_swaps_first_player():
    game = human_game().reversed_sides()
    assert game.first_player is HexState.BLUE
    assert game.player is HexState.BLUE


def test_reversed_sides_against_computer_lets_it_open():
    game = hexPosition(5).reversed_sides()
    assert game.red_player is PlayerType.COMPUTER
    assert game.blue_player is PlayerType.HUMAN
    # red is a computer and opens right away
    assert game.red_history == [HexCoord.plain(2, 2)]
    assert game.player is HexState.BLUE


def test_finished_match_can_restart():
    game = human_game()
    for cell in [(1, 0), (0, 0), (1, 1), (0, 1), (1, 2)]:
        game.human_play(*cell)
    assert game.can_restart()
    assert game.resized(4).is_empty()


# ------------------------------------------------------------------
# Console
# ------------------------------------------------------------------
def scripted(*answers):
    answers = iter(answers)
    return lambda prompt: next(answers)


def test_console_play(capsys):
    game = human_game(size=2)
    winner = game.play(scripted("zz", "A1", "A1", "A2", "b1"))
    assert winner is HexState.RED
    out = capsys.readouterr().out
    assert "Not a free cell" in out
    assert "Red wins!" in out


def test_console_quit_leaves_match_open():
    game = human_game(size=2)
    assert game.play(scripted("A1", "quit"), verbose=False) is HexState.NONE
    assert not game.ended
    assert game.player is HexState.BLUE


def test_print_shows_board(capsys):
    game = human_game()
    game.human_play(0, 0)
    game.print()
    out = capsys.readouterr().out
    assert "●" in out
    assert "A   B   C" in out
