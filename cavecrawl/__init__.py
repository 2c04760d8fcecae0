"""cavecrawl: procedural cave maps with key-gated goals and breakable walls."""

__version__ = "0.3.0"
