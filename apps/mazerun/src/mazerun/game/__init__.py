"""
MAZERUN game wiring.

- `frame_loop.FrameLoop`: per-frame driver (events -> physics -> progression -> render).
- `state_machine.GameStateMachine`: menu / playing / paused / completed.
- `app.MazeApp`: Panda3D ShowBase host; `app.run(...)` is used by `python -m mazerun`.
"""
