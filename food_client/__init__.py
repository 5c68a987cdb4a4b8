"""Web client for the food-ordering platform"""

__version__ = "1.0.0"
