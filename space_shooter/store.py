"""
Entity store - one arena per entity kind with stable integer ids
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from .entities import Boss, Bullet, BossProjectile, Explosion, Hostile, Powerup, Star

T = TypeVar("T")


class EntityPool(Generic[T]):
    """
    Insertion-ordered collection of entities keyed by id.

    Ids come from a counter that only moves forward, so an id is never handed
    out twice during the pool's lifetime. Removal drops the slot; surviving
    entities keep their ids.
    """

    def __init__(self):
        self._items: Dict[int, T] = {}
        self._next_id = 0

    def add(self, entity: T) -> int:
        entity_id = self._next_id
        self._next_id += 1
        entity.id = entity_id
        self._items[entity_id] = entity
        return entity_id

    def get(self, entity_id: int) -> Optional[T]:
        return self._items.get(entity_id)

    def remove(self, entity_id: int):
        self._items.pop(entity_id, None)

    def remove_ids(self, ids: Iterable[int]):
        """Filter out every entity whose id is in ids"""
        doomed = set(ids)
        if doomed:
            self._items = {i: e for i, e in self._items.items() if i not in doomed}

    def keep(self, predicate: Callable[[T], bool]):
        """Keep only the entities for which predicate holds"""
        self._items = {i: e for i, e in self._items.items() if predicate(e)}

    def clear(self):
        self._items = {}

    def ids(self) -> List[int]:
        return list(self._items)

    def __contains__(self, entity_id: int) -> bool:
        return entity_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


class EntityStore:
    """All entity collections of one game session"""

    def __init__(self):
        self.bullets: EntityPool[Bullet] = EntityPool()
        self.hostiles: EntityPool[Hostile] = EntityPool()
        self.boss_projectiles: EntityPool[BossProjectile] = EntityPool()
        self.powerups: EntityPool[Powerup] = EntityPool()
        self.explosions: EntityPool[Explosion] = EntityPool()
        self.stars: List[Star] = []
        self.boss: Optional[Boss] = None
        self._boss_serial = 0

    def spawn_boss(self, boss: Boss) -> Boss:
        assert self.boss is None, "a boss is already present"
        boss.id = self._boss_serial
        self._boss_serial += 1
        self.boss = boss
        return boss

    def clear_boss(self):
        self.boss = None
