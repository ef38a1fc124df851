"""Library Manager — keep library IP out of exported layouts and relink it on load.

Stages, in the order a session uses them:

  registry   — load the library map (libs.json) and register each library
  export     — rename library-derived cells to placeholders and write the
               layout without their geometry
  relink     — after reopening, import the real library cells and rewire
               every instance that pointed at a placeholder
  prune      — drop every library/proxy cell from the current layout

The layout database itself is KLayout's (``klayout.db``).
"""

__version__ = "0.3.0"
