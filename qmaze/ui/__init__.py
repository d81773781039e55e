"""Text presentation of the maze and learned values."""
