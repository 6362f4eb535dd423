"""NextWave: boat departures and weather for Swiss lake stations."""

__version__ = "0.1.0"
