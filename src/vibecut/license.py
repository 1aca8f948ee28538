"""License validation."""

from .store import EditStore


def is_licensed(store: EditStore, key: str | None) -> bool:
    """True iff key names a license marked valid in the store.

    No key (None) is unlicensed without a store lookup. Any given key,
    the empty string included, is looked up; an unknown key is simply
    False. Only store failures raise (PersistenceError).
    """
    if key is None:
        return False
    return store.has_valid_license(key)


check_license = is_licensed
