"""
Tile Deploy Test Suite

Structure:
- unit/: validation, path planning, config, tool wrappers, CLI
- integration/: full pipeline runs against fake collaborators
- fakes.py: in-memory RasterInspector / TileGenerator / VersionControl
"""
