"""Scanner, symbol table, semantic checks and stack virtual machine for the KPL language."""

__version__ = "1.0.0"