"""Domain model: maze geometry and the Q-learning engine."""
