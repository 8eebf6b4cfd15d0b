"""Built-in agent profiles. Each module exposes a ``Profile`` class."""
