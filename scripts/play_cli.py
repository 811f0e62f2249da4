from __future__ import annotations

import argparse
import logging
from typing import List

from conquest.config import GameConfig
from conquest.game.engine import Game
from conquest.game.state import Marker


MARKER_GLYPHS = {
    Marker.DORMANT: " ",
    Marker.SELECTED: "*",
    Marker.HIGHLIGHTED: "+",
    Marker.TARGETED: "x",
}

HELP = """Commands:
  click N         click territory N
  commit | clear  commit or discard staged placement
  step N          troops staged per placement click
  place | attack | fortify   change phase
  attack N | attack all | attack advance
  move N | move all          fortify from selected to target
  end             end the turn
  show | help | quit"""


def format_board(game: Game) -> str:
    lines: List[str] = []
    turn = game.state.turn
    lines.append(
        f"Turn {turn.number} | player {turn.player_index} | phase {turn.phase.value} | "
        f"troops {game.troops_staged_for_placement()}/{game.troops_available_for_placement()}"
    )
    display = game.troops_to_display()
    for territory in game.graph:
        marker = MARKER_GLYPHS[game.state.markers[territory.id]]
        neighbors = ",".join(str(n) for n in territory.neighbors)
        lines.append(
            f" [{marker}] {territory.id:>2} {territory.name:<12} "
            f"owner {game.owner(territory.id)}  troops {display[territory.id]:>3}  -> {neighbors}"
        )
    return "\n".join(lines)


def run_command(game: Game, words: List[str]) -> bool:
    command, args = words[0], words[1:]
    arg = args[0] if args else ""
    if command == "click" and arg.isdigit():
        return game.handle_click(int(arg))
    if command == "commit":
        return game.commit_placement()
    if command == "clear":
        return game.clear_placement()
    if command == "step" and arg.isdigit():
        return game.set_troops_to_place(int(arg))
    if command == "place":
        return game.goto_place()
    if command == "fortify":
        return game.goto_fortify()
    if command == "attack":
        if not arg:
            return game.goto_attack()
        if arg == "all":
            return game.attack_all()
        if arg == "advance":
            return game.attack_all_and_advance()
        return arg.isdigit() and game.attack_with(int(arg))
    if command == "move":
        if arg == "all":
            return game.fortify_all()
        return arg.isdigit() and game.fortify_troops(int(arg))
    if command == "end":
        return game.end_turn()
    raise ValueError(f"Unknown command '{' '.join(words)}'. Type 'help'.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a conquest match in the terminal.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--players", type=int, default=2)
    parser.add_argument("--troop-bonus", type=int, default=5)
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = GameConfig(num_players=args.players, seed=args.seed, troop_bonus=args.troop_bonus)
    game = Game(config=config)

    print(HELP)
    print(format_board(game))
    while not game.is_over():
        try:
            raw = input("> ").strip()
        except EOFError:
            break
        if not raw:
            continue
        words = raw.lower().split()
        if words[0] == "quit":
            break
        if words[0] == "help":
            print(HELP)
            continue
        if words[0] != "show":
            previous_battle = game.last_battle
            try:
                changed = run_command(game, words)
            except ValueError as exc:
                print(exc)
                continue
            if not changed:
                print("Nothing happened.")
            elif game.last_battle is not previous_battle:
                battle = game.last_battle
                print(
                    f"Battle: {len(battle.rounds)} rounds, attacker lost {battle.attacker_losses}, "
                    f"defender lost {battle.defender_losses}"
                )
        print(format_board(game))

    if game.is_over():
        print(f"Player {game.winner()} wins.")


if __name__ == "__main__":
    main()
