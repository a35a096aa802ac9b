"""Top-level package for the transit graph project.

This package turns two CSV datasets, stations and the connections
between them, into a directed multigraph whose nodes and edges carry
display attributes (position, size, color, served routes) ready to be
handed to a graph renderer.
"""
