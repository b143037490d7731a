#!/usr/bin/python3

"""Map block and biome types to compact integer ids and back.

Sections store one small integer per block instead of a full block type. The
Registry hands out these ids: built-in types get the ids of their position in
the list the registry was created with, anything else is appended the first
time it is seen. Ids are never reused or reassigned, so an id obtained once
stays valid for the lifetime of the process.
"""

from threading import Lock


class Registry:
    """A bidirectional, append-only mapping between types and integer ids."""

    def __init__(self, builtins=()):
        """Initialise a new registry holding the given types in order."""
        self._lock = Lock()
        self._items = []
        self._ids = {}
        for item in builtins:
            self.id_of(item)

    def __len__(self):
        return len(self._items)

    def __contains__(self, item):
        return item in self._ids

    def id_of(self, item):
        """Return the id of item, registering it if it is new."""
        with self._lock:
            try:
                return self._ids[item]
            except KeyError:
                new_id = self._ids[item] = len(self._items)
                self._items.append(item)
                return new_id

    def lookup(self, item_id):
        """Return the type registered under item_id.

        Raise KeyError if no type has been given that id.
        """
        with self._lock:
            if not 0 <= item_id < len(self._items):
                raise KeyError('id {} is not registered'.format(item_id))
            return self._items[item_id]
