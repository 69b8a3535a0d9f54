"""
Run rules around the movement core.

Level progression lives here: exit detection, score submission, advancing to the
next maze or finishing the run. It does not move the player or draw anything.
"""
