"""Core qualifier evaluation utilities.

Responsibilities:
  - Provide the evaluator, result and change-notifier types.
  - Must not read UI elements directly; consumes FieldState snapshots.
"""
