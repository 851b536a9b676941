"""Top-level package for vector-spray.

This repository follows the cookiecutter-data-science template where project
code lives under `src/`. The simulation lives under `src.vectorspray`
(parameters, dynamics, sprays, simulator, scenarios) and figures under
`src.visualization`.
"""

# Package marker; keep this module lightweight.
