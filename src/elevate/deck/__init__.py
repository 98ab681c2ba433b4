from .run_deck import RunDeck, SCHEMA_VERSION

__all__ = ["RunDeck", "SCHEMA_VERSION"]
