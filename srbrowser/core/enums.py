from enum import StrEnum


class EntityType(StrEnum):
    """Kinds of entities a client can subscribe to."""

    PLAYER = "player"
    GAME = "game"
