"""Route table construction.

Every page with a parent gets ``parent.route + "/" + slug``.  Parents
are visited before their children because the node table is filled in
walk order.  The root has no route and is never routable.
"""

import logging

from quire.pages.tree import Tree

logger = logging.getLogger("quire.routing")


def build_routes(tree: Tree) -> dict[str, str]:
    """Populate ``tree.routes`` and feed routable pages to the taxonomy.

    When two pages compute the same route the later one wins and a
    warning is logged.  If ``config.home_alias`` names a registered
    route, ``/`` points at the same page and that page's route becomes
    ``/``.
    """
    for page in tree:
        parent = tree.parent(page)
        if parent is None:
            page.routable = False
            continue

        route = parent.route.rstrip("/") + "/" + page.slug
        previous = tree.routes.get(route)
        if previous is not None and previous != page.path:
            logger.warning("Route %s of %s replaces %s", route, page.path, previous)
        tree.routes[route] = page.path
        page.route = route

        if page.routable:
            tree.taxonomy.add(page)

    home = tree.config.home_alias.strip("/")
    if home and "/" + home in tree.routes:
        target = tree.routes["/" + home]
        tree.routes["/"] = target
        tree.nodes[target].route = "/"

    logger.debug("Built %d routes", len(tree.routes))
    return tree.routes
