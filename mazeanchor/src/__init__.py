"""
mazeanchor source packages: generators, conversion, validation, pipeline, server.
"""
