"""Routing: flat route table over the page tree, with alias fallback.

Routes are built once per generation after the tree is complete;
dispatch is a lookup against that table.
"""

from quire.routing.dispatch import Redirect, dispatch
from quire.routing.table import build_routes

__all__ = ["Redirect", "build_routes", "dispatch"]
