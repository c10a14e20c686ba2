"""
Procedural generators for mazeanchor.
"""
