"""CircuitSnips - KiCad schematic snippet processing and validation."""

__version__ = "0.1.0"
