"""Motor de combinaciones de variantes para la consola de la tienda."""

__version__ = "0.1.0"
