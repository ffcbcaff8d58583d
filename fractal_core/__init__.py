"""
Fractal tic-tac-toe core Python package.

Pure rules logic for tic-tac-toe boards nested to an arbitrary depth, kept
apart from the Flask host so it can be tested on its own.
Modules:
- player.py: Player
- board.py: Resolved, Nested, build and tree traversal
- winner.py: win detection over derived grids
- collapse.py: collapse of decided sub-boards, stalemate, move counting
- state.py: GameState, Status, Outcome
- moves.py: new_game, apply_move and queries
- errors.py: RulesError and its subclasses
"""
