from .openweather import OpenWeatherClient

__all__ = ["OpenWeatherClient"]
