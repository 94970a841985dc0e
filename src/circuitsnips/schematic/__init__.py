"""KiCad schematic text transforms: classify, wrap, sanitize, extract, validate."""
