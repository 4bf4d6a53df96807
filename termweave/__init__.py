"""Building blocks for terminal user interfaces: styles, sequences, layout and widgets."""

__version__ = "0.1.0"