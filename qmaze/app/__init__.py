"""Simulation driver and phase state machine."""
