"""
mazeanchor - procedural mazes compiled into anchored AR wall geometry.
"""

__version__ = '1.0.0'
