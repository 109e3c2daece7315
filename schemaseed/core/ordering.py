"""Foreign key dependency ordering for entity tables."""

from schemaseed.core.entity import Entity
from schemaseed.core.entity_model import EntityModel
from schemaseed.validation import ConfigurationError


def dependency_graph(model: EntityModel) -> dict[str, list[str]]:
    """Build the foreign key graph of a model.

    Returns:
        Mapping of table name to the table names it references, in
        declaration order. Self references and unknown targets are skipped.
    """
    graph: dict[str, list[str]] = {}
    for entity in model.entities:
        targets = []
        for prop in entity.foreign_keys:
            target = prop.foreign_key.entity.lower()
            if target == entity.table_name or not model.has_entity(target):
                continue
            if target not in targets:
                targets.append(target)
        graph[entity.table_name] = targets
    return graph


def _find_cycle(graph: dict[str, list[str]], remaining: list[str]) -> list[str]:
    """Find one cycle among the remaining (unorderable) tables."""
    # Every remaining table still waits on another remaining table, so
    # following any unresolved edge must eventually revisit a table.
    pending = set(remaining)
    current = remaining[0]
    path = [current]
    while True:
        current = next(t for t in graph[current] if t in pending)
        if current in path:
            return path[path.index(current) :] + [current]
        path.append(current)


def dependency_order(model: EntityModel) -> list[Entity]:
    """Order entities so every table comes after the tables it references.

    Each step emits the first declared entity whose referenced tables have
    all been emitted, so a model that is already ordered comes back
    unchanged.

    Args:
        model: Entity model to order

    Returns:
        Entities in dependency order

    Raises:
        ConfigurationError: If the foreign key graph contains a cycle
    """
    graph = dependency_graph(model)
    by_table = {entity.table_name: entity for entity in model.entities}

    ordered: list[Entity] = []
    emitted: set[str] = set()
    remaining = [entity.table_name for entity in model.entities]

    while remaining:
        ready = next((t for t in remaining if all(dep in emitted for dep in graph[t])), None)
        if ready is None:
            cycle = _find_cycle(graph, remaining)
            raise ConfigurationError(f"Foreign key cycle between entities: {' -> '.join(cycle)}")
        ordered.append(by_table[ready])
        emitted.add(ready)
        remaining.remove(ready)

    return ordered
