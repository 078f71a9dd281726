"""SUNDRIES test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real interactions with the OS (spawned processes, event loop timers).
- functional/   : User-visible flows of the ``sundries`` CLI, end-to-end.
- helpers/      : Shared utilities (no tests here).

General guidance
- Keep unit fast and deterministic (no real processes); path tests pin the flavour.
- Integration spawns ``sys.executable`` so tests do not depend on system tools.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, integration, functional, property
"""
