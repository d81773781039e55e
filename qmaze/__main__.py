"""Command-line driver: learn a maze by random walk, then replay the greedy policy."""

import argparse
import sys
from typing import List, Optional

from .app.controller import MazeController
from .domain.types import BoundaryViolation, RLConfig
from .ui.text_view import render_maze, render_policy, render_q_values, format_path
from .utils.maze_factory import create_default_world, generate_maze_grid
from .utils.maze_serialization import MazeData, load_maze, save_maze
from .utils.rng import SeededRNG


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qmaze", description="Tabular Q-learning maze demo")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--maze", type=str, help="Path to saved maze file")
    source.add_argument("--generate", type=int, metavar="SIZE", help="Generate a SIZE x SIZE maze")
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    parser.add_argument("--steps", type=int, default=10000, help="Number of learning steps")
    parser.add_argument("--alpha", type=float, default=0.4, help="Learning rate")
    parser.add_argument("--discount", type=float, default=1.0, help="Discount factor")
    parser.add_argument("--epsilon", type=float, default=None,
                        help="Enable epsilon-greedy learning with this exploration rate")
    parser.add_argument("--max-replay-steps", type=int, default=100, help="Greedy moves allowed in replay")
    parser.add_argument("--show-q-values", action="store_true", help="Print every learned Q-value")
    parser.add_argument("--show-policy", action="store_true", help="Print the greedy policy as arrows")
    parser.add_argument("--save-maze", type=str, help="Write the maze layout to this JSON file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print("🧠 Q-Learning Maze")
    print("=" * 50)

    rng = SeededRNG(args.seed)

    # Load or generate maze
    if args.maze:
        print(f"📁 Loading maze from: {args.maze}")
        maze_data = load_maze(args.maze)
        if maze_data is None:
            print("❌ Failed to load maze. Exiting.")
            return 1
        try:
            world = maze_data.to_world()
        except (TypeError, ValueError) as e:
            print(f"❌ Invalid maze: {e}")
            return 1
        start = maze_data.start
        maze_name = maze_data.name or args.maze
    elif args.generate is not None:
        print(f"🎲 Generating new maze: {args.generate}x{args.generate}")
        try:
            world, start, _goal = generate_maze_grid(args.generate, args.generate, rng=rng)
        except ValueError as e:
            print(f"❌ {e}")
            return 1
        maze_name = f"Generated_Maze_{world.width}x{world.height}"
    else:
        world, start = create_default_world()
        maze_name = "Default maze"

    try:
        config = RLConfig(
            learning_rate=args.alpha,
            discount_factor=args.discount,
            epsilon=args.epsilon,
            max_replay_steps=args.max_replay_steps,
        ).validate()
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    if args.steps < 0:
        print(f"❌ Invalid configuration: steps must not be negative, got {args.steps}")
        return 1

    print(f"🏷️  Maze: {maze_name}")
    print(f"📐 Grid: {world.width}x{world.height}")
    print(f"🎯 Start: {start} → Goal: {world.goal}")
    print(render_maze(world, start=start))

    if args.save_maze:
        if save_maze(MazeData.from_world(world, start, name=maze_name), args.save_maze):
            print(f"💾 Maze saved to {args.save_maze}")

    print(f"\n⚙️  Learning Configuration:")
    print(f"   Steps: {args.steps}")
    print(f"   Learning rate: {config.learning_rate}")
    print(f"   Discount factor: {config.discount_factor}")
    if config.epsilon is None:
        print(f"   Exploration: random walk")
    else:
        print(f"   Exploration: epsilon-greedy ({config.epsilon})")

    controller = MazeController(world, start, config=config, rng=rng)

    print(f"\n🚀 Learning...")
    try:
        result = controller.learn(args.steps)
    except BoundaryViolation as e:
        print(f"❌ Learning left the maze: {e}")
        return 1
    print(f"   Goal arrivals: {result.goal_arrivals}")
    print(f"   Wall hits: {result.wall_hits}")
    print(f"   States visited: {len(controller.q_table)}")

    if args.show_q_values:
        print(f"\n📊 Q-values:")
        print(render_q_values(world, controller.q_table))

    if args.show_policy:
        print(f"\n🧭 Greedy policy:")
        print(render_policy(world, controller.q_table))

    print(f"\n🧪 Replaying learned policy...")
    try:
        path_result = controller.run_replay(config.max_replay_steps)
    except BoundaryViolation as e:
        print(f"❌ Replay left the maze: {e}")
        return 1
    print(render_maze(world, position=controller.position, start=start))
    print(f"   Path: {format_path(path_result.path, limit=40)}")
    if path_result.success:
        print(f"✅ Goal reached in {path_result.steps_taken} steps")
        return 0

    print(f"❌ Goal not reached after {path_result.steps_taken} steps")
    return 1


if __name__ == "__main__":
    sys.exit(main())
