# roguegrid/entities/registry.py
from typing import Any, Self

import polars as pl
import structlog

from roguegrid.entities.components import Position

log = structlog.get_logger()

ENTITY_SCHEMA: dict[str, pl.DataType] = {
    "entity_id": pl.UInt32,
    "is_active": pl.Boolean,
    "x": pl.Int32,
    "y": pl.Int32,
    "glyph": pl.Utf8,
    "name": pl.Utf8,
    "blocks_movement": pl.Boolean,
    "is_alive": pl.Boolean,
}

# Components that callers may not overwrite through set_entity_component.
PROTECTED_COMPONENTS = frozenset({"entity_id", "is_active"})


class EntityRegistry:
    """Column store of every entity on the current level.

    Deleted entities are only marked inactive; queries ignore them until
    :meth:`compact_registry` drops them.
    """

    def __init__(self: Self):
        self.entities_df: pl.DataFrame = pl.DataFrame(schema=ENTITY_SCHEMA)
        self._next_entity_id: int = 0
        log.debug("EntityRegistry initialized", schema=list(ENTITY_SCHEMA.keys()))

    def __len__(self: Self) -> int:
        return self.entities_df.filter(pl.col("is_active")).height

    def _get_next_id(self: Self) -> int:
        current_id = self._next_entity_id
        self._next_entity_id += 1
        if self._next_entity_id > 2**32 - 1:
            log.critical("Entity ID counter overflowed", next_id=self._next_entity_id)
            raise OverflowError("Entity ID counter overflowed (UInt32 limit reached).")
        return current_id

    def create_entity(
        self: Self,
        x: int,
        y: int,
        glyph: str,
        name: str,
        blocks_movement: bool = True,
        is_alive: bool = False,
    ) -> int:
        new_id = self._get_next_id()
        entity_data = {
            "entity_id": [new_id],
            "is_active": [True],
            "x": [x],
            "y": [y],
            "glyph": [glyph],
            "name": [name],
            "blocks_movement": [blocks_movement],
            "is_alive": [is_alive],
        }
        new_entity_df = pl.DataFrame(entity_data, schema=ENTITY_SCHEMA)
        if self.entities_df.height == 0:
            self.entities_df = new_entity_df
        else:
            self.entities_df = pl.concat(
                [self.entities_df, new_entity_df], how="vertical"
            )
        log.debug(
            "Entity created", entity_id=new_id, name=name, pos=(x, y),
            blocks=blocks_movement,
        )
        return new_id

    def _active_mask(self: Self, entity_id: int) -> pl.Expr:
        return (pl.col("entity_id") == entity_id) & pl.col("is_active")

    def get_entity_component(
        self: Self, entity_id: int, component_name: str
    ) -> Any | None:
        """Retrieves the value of a specific component for a given *active* entity."""
        if component_name not in ENTITY_SCHEMA:
            log.warning(
                "Component does not exist", entity_id=entity_id, component=component_name
            )
            raise ValueError(
                f"Component '{component_name}' does not exist in ENTITY_SCHEMA."
            )
        entity_df = self.entities_df.filter(self._active_mask(entity_id))
        if entity_df.height == 0:
            return None
        return entity_df.get_column(component_name).item()

    def set_entity_component(
        self: Self, entity_id: int, component_name: str, value: Any
    ) -> bool:
        log_context = {
            "entity_id": entity_id,
            "component": component_name,
            "new_value": value,
        }
        if component_name not in ENTITY_SCHEMA:
            log.warning("Component does not exist", **log_context)
            raise ValueError(
                f"Component '{component_name}' does not exist in ENTITY_SCHEMA."
            )
        if component_name in PROTECTED_COMPONENTS:
            log.warning("Attempted to set protected component", **log_context)
            raise ValueError(f"Cannot directly set '{component_name}' component.")

        mask = self._active_mask(entity_id)
        if self.entities_df.filter(mask).height == 0:
            log.debug("Entity not found or inactive, cannot set component", **log_context)
            return False
        target_dtype = ENTITY_SCHEMA[component_name]
        self.entities_df = self.entities_df.with_columns(
            pl.when(mask)
            .then(pl.lit(value, dtype=target_dtype))
            .otherwise(pl.col(component_name))
            .alias(component_name)
        )
        return True

    def get_position(self: Self, entity_id: int) -> Position | None:
        """Return the Position component for an entity if available."""
        row = self.entities_df.filter(self._active_mask(entity_id)).select("x", "y")
        if row.height == 0:
            return None
        pos_x, pos_y = row.row(0)
        return Position(int(pos_x), int(pos_y))

    def set_position(self: Self, entity_id: int, position: Position) -> bool:
        """Update an entity's position component."""
        mask = self._active_mask(entity_id)
        if self.entities_df.filter(mask).height == 0:
            return False
        self.entities_df = self.entities_df.with_columns(
            pl.when(mask).then(pl.lit(position.x, dtype=pl.Int32)).otherwise(pl.col("x")).alias("x"),
            pl.when(mask).then(pl.lit(position.y, dtype=pl.Int32)).otherwise(pl.col("y")).alias("y"),
        )
        return True

    def get_entities_at(self: Self, x: int, y: int) -> pl.DataFrame:
        return self.entities_df.filter(
            (pl.col("x") == x) & (pl.col("y") == y) & pl.col("is_active")
        )

    def get_blocking_entity_at(self: Self, x: int, y: int) -> int | None:
        result = (
            self.entities_df.lazy()
            .filter(
                (pl.col("x") == x)
                & (pl.col("y") == y)
                & pl.col("blocks_movement")
                & pl.col("is_active")
            )
            .select("entity_id")
            .head(1)
            .collect()
        )
        if result.height > 0:
            return int(result.item())
        return None

    def blocking_positions(self: Self) -> set[tuple[int, int]]:
        """Positions of every active blocking entity."""
        rows = self.entities_df.filter(
            pl.col("blocks_movement") & pl.col("is_active")
        ).select("x", "y")
        return {(int(x), int(y)) for x, y in rows.iter_rows()}

    def delete_entity(self: Self, entity_id: int) -> bool:
        log_context = {"entity_id": entity_id}
        mask = self._active_mask(entity_id)
        if self.entities_df.filter(mask).height == 0:
            log.debug("Entity already inactive or does not exist", **log_context)
            return False
        self.entities_df = self.entities_df.with_columns(
            pl.when(mask)
            .then(pl.lit(False))
            .otherwise(pl.col("is_active"))
            .alias("is_active")
        )
        log.debug("Entity marked as inactive", **log_context)
        return True

    def compact_registry(self: Self) -> None:
        initial_count = self.entities_df.height
        self.entities_df = self.entities_df.filter(pl.col("is_active"))
        log.info(
            "Registry compacted",
            initial_count=initial_count,
            final_count=self.entities_df.height,
        )

    def get_active_entities(self: Self) -> pl.DataFrame:
        return self.entities_df.filter(pl.col("is_active"))

    def count_by_name(self: Self) -> dict[str, int]:
        counts = self.get_active_entities().group_by("name").len()
        return {name: int(n) for name, n in counts.iter_rows()}
