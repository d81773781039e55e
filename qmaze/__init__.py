"""Q-Learning Maze - a tabular reinforcement learning demonstration.

An agent learns to navigate a fixed grid maze from a start cell to a goal
cell by random-walk Q-learning, then replays the greedy policy.
"""

__version__ = "1.0.0"
__author__ = "Q-Learning Maze Demo"
