from __future__ import annotations

import argparse
import logging
from collections import Counter

import numpy as np

from conquest.config import GameConfig
from conquest.game.actions import ACTION_KINDS, Action, apply_action
from conquest.game.engine import Game
from conquest.game.state import Marker, count_territories


def random_action(game: Game, rng: np.random.Generator) -> Action:
    kind = str(rng.choice(ACTION_KINDS))
    if kind in ("click", "stage"):
        return Action(kind, {"territory": int(rng.integers(-1, len(game.graph)))})
    if kind in ("attack", "fortify"):
        return Action(kind, {"troops": int(rng.integers(0, 8))})
    return Action(kind)


def check_invariants(game: Game) -> None:
    owned = game.players.total_owned()
    if owned != len(game.graph):
        raise AssertionError(f"{owned} owned territories on a {len(game.graph)} territory map")
    for player in game.players.players:
        if count_territories(game.state.owners, player.index) != len(player.territories):
            raise AssertionError(f"Owner array out of sync for player {player.index}")
    if int(game.state.troops.min()) < 1:
        raise AssertionError("A territory dropped below one troop")
    if game.troops_staged_for_placement() > game.troops_available_for_placement():
        raise AssertionError("More troops staged than available")
    targeted = game.state.indices_with(Marker.TARGETED)
    if len(targeted) > 1:
        raise AssertionError("More than one targeted territory")
    if targeted and len(game.state.indices_with(Marker.SELECTED)) != 1:
        raise AssertionError("A target without exactly one selected source")


def play_game(seed: int, max_commands: int, num_players: int) -> int | None:
    game = Game(config=GameConfig(num_players=num_players, seed=seed))
    # Separate stream so command choice never perturbs the dice.
    rng = np.random.default_rng(seed + 1)
    for _ in range(max_commands):
        apply_action(game, random_action(game, rng))
        check_invariants(game)
        if game.is_over():
            break
    return game.winner()


def main() -> None:
    parser = argparse.ArgumentParser(description="Drive games with random commands.")
    parser.add_argument("--games", type=int, default=20)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--players", type=int, default=2)
    parser.add_argument("--max-commands", type=int, default=20_000)
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    wins: Counter = Counter()
    for game_index in range(args.games):
        winner = play_game(args.seed + game_index, args.max_commands, args.players)
        wins["unfinished" if winner is None else f"player {winner}"] += 1
        print(f"Game {game_index + 1}: winner={winner}")

    print(f"\nSummary after {args.games} games:")
    print(dict(wins))


if __name__ == "__main__":
    main()
