"""Library pieces of a hackable emulator console: memory regions, snapshots, cheat filters, Z80 info, life cycle, timing and logging."""

__version__ = "0.1.0"