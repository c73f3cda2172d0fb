"""Project version constants.

These constants are printed by ``openhole --version`` and logged at the start
of every run so that a report can be traced back to the engine that wrote it.
"""

ENGINE_NAME: str = "openholevolume"
ENGINE_VERSION: str = "0.1.0"
