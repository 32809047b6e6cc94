"""Routing — route tree, variable kinds, and endpoints.

Endpoints are registered during setup and the tree is frozen when the
app starts serving.
"""
