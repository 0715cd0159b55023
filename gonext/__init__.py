"""
GoNext travel journal: places, trips, itineraries and photos on local storage.
"""

__version__ = "1.0.0"
