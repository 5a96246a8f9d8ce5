"""A tower defense game with random maps, plus its sprite, collision, label, group and path modules."""

__version__ = "0.1.0"