"""Game server building blocks: buffers, packet codec, config tables, tasks and schema tooling."""

__version__ = "0.1.0"