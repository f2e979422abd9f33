"""Dirty-flag bookkeeping shared by the persisted identity entities."""

from abc import ABC, abstractmethod


class Persistable(ABC):
    """Mixin for entities that are saved when their state changed."""

    _needs_save: bool = False

    @property
    @abstractmethod
    def storage_key(self) -> str:
        """Key under which the entity is serialized."""

    @property
    def needs_save(self) -> bool:
        return self._needs_save

    def mark_dirty(self) -> None:
        self._needs_save = True

    def mark_saved(self) -> None:
        self._needs_save = False
