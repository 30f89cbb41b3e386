"""Bingo domain services: board generation, win lines, rooms.

Nothing in this package imports Flask. Socket handlers and HTTP routes
drive these objects and take care of projecting and emitting state.
"""
