# src/pulseboard_backend/app/services/weather.py
"""
Procedural weather.

There is no weather provider behind this widget: temperature, humidity and
wind are synthesized from latitude and season, and a small generative model
only writes the 2-3 word description. Treat every number here as mock data.
"""
from __future__ import annotations

import logging
import math
import random
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from pulseboard_router.adapters.huggingface import InferenceClient, InferenceError, first_text
from pulseboard_router.core.config import section

logger = logging.getLogger(__name__)

CITY_COORDINATES: Dict[str, Tuple[float, float, str]] = {
    "new york": (40.7128, -74.0060, "US"),
    "london": (51.5074, -0.1278, "UK"),
    "paris": (48.8566, 2.3522, "FR"),
    "tokyo": (35.6762, 139.6503, "JP"),
    "sydney": (-33.8688, 151.2093, "AU"),
    "mumbai": (19.0760, 72.8777, "IN"),
    "beijing": (39.9042, 116.4074, "CN"),
    "cairo": (30.0444, 31.2357, "EG"),
    "moscow": (55.7558, 37.6173, "RU"),
    "rio de janeiro": (-22.9068, -43.1729, "BR"),
    "delhi": (28.6139, 77.2090, "IN"),
    "berlin": (52.5200, 13.4050, "DE"),
    "mexico city": (19.4326, -99.1332, "MX"),
    "toronto": (43.6532, -79.3832, "CA"),
    "madrid": (40.4168, -3.7038, "ES"),
    "rome": (41.9028, 12.4964, "IT"),
}

DEFAULT_CITY = "new york"

# keyword -> icon code; order matters ("partly cloudy" before "cloudy")
WEATHER_ICONS: List[Tuple[str, str]] = [
    ("sunny", "01d"),
    ("clear", "01d"),
    ("partly cloudy", "02d"),
    ("cloudy", "03d"),
    ("overcast", "04d"),
    ("thunderstorm", "11d"),
    ("light rain", "09d"),
    ("heavy rain", "09d"),
    ("rain", "10d"),
    ("snow", "13d"),
    ("mist", "50d"),
    ("fog", "50d"),
]
DEFAULT_ICON = "03d"


def resolve_location(
    location: Optional[str],
    lat: Optional[float],
    lon: Optional[float],
) -> Tuple[float, float, str]:
    """
    City name wins over coordinates; unknown cities land on New York.
    No input at all also means New York.
    """
    location = (location or "").strip()
    if not location and (lat is None or lon is None):
        location = DEFAULT_CITY

    if location:
        key = location.lower()
        city_lat, city_lon, _ = CITY_COORDINATES.get(key, CITY_COORDINATES[DEFAULT_CITY])
        return city_lat, city_lon, key.title()

    return float(lat), float(lon), "Unknown Location"


def _is_summer(lat: float, when: datetime) -> bool:
    month = when.month - 1  # 0-11
    if lat > 0:
        return 5 <= month <= 8
    return month <= 2 or month >= 9


def generate_temperature(lat: float, when: datetime, rng: random.Random) -> float:
    equator_factor = 1 - abs(lat) / 90
    base = 5 + equator_factor * 30
    seasonal = 10 if _is_summer(lat, when) else -10
    fluctuation = (rng.random() - 0.5) * 5
    return round(base + seasonal + fluctuation, 1)


def generate_humidity(lat: float, rng: random.Random) -> int:
    equator_factor = 1 - abs(lat) / 90
    base = 50 + equator_factor * 30
    fluctuation = (rng.random() - 0.5) * 20
    return round(min(max(base + fluctuation, 30), 95))


def generate_wind_speed(rng: random.Random) -> float:
    return round(0.5 + rng.random() * 9.5, 1)


def country_for(lat: float, lon: float) -> str:
    """Country of the nearest known city."""
    best = min(
        CITY_COORDINATES.values(),
        key=lambda c: math.hypot(lat - c[0], lon - c[1]),
    )
    return best[2]


def icon_for(description: str) -> str:
    lowered = description.lower()
    for keyword, icon in WEATHER_ICONS:
        if keyword in lowered:
            return icon
    return DEFAULT_ICON


def description_for_temperature(temperature: float) -> str:
    if temperature > 30:
        return "sunny"
    if temperature > 20:
        return "partly cloudy"
    if temperature > 10:
        return "cloudy"
    return "overcast"


def forecast_description(temperature: float) -> str:
    if temperature > 30:
        return "sunny"
    if temperature > 25:
        return "clear"
    if temperature > 20:
        return "partly cloudy"
    if temperature > 15:
        return "cloudy"
    if temperature > 10:
        return "overcast"
    if temperature > 5:
        return "light rain"
    return "rain"


def _tidy_description(raw: str) -> str:
    text = re.sub(r"[\"'.]", "", raw).lower().strip()
    words = text.split()
    if len(words) > 4:
        words = words[:3]
    return " ".join(words)


async def generate_description(temperature: float, client: InferenceClient) -> str:
    """Ask the description model; fall back to temperature bands."""
    if not client.configured:
        return description_for_temperature(temperature)

    cfg = section("weather")
    prompt = (
        "Generate a short weather description (2-3 words) for a location "
        f"with temperature {temperature}°C."
    )
    try:
        data = await client.run(
            cfg.get("description_model", "google/flan-t5-base"),
            prompt,
            timeout=float(cfg.get("timeout", 8.0)),
        )
    except InferenceError as ex:
        logger.warning("weather description model failed: %s", ex)
        return description_for_temperature(temperature)

    description = _tidy_description(first_text(data, "generated_text"))
    return description or description_for_temperature(temperature)


def generate_forecast(
    lat: float,
    start: datetime,
    rng: random.Random,
    days: int = 5,
) -> List[Dict[str, Any]]:
    forecast: List[Dict[str, Any]] = []
    for i in range(1, days + 1):
        when = start + timedelta(days=i)
        temperature = generate_temperature(lat, when, rng)
        description = forecast_description(temperature)
        forecast.append(
            {
                "date": when.isoformat(),
                "temperature": temperature,
                "description": description,
                "icon": icon_for(description),
            }
        )
    return forecast


async def get_weather(
    client: InferenceClient,
    location: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    now = now or datetime.now()
    rng = rng or random.Random()

    lat_, lon_, name = resolve_location(location, lat, lon)
    temperature = generate_temperature(lat_, now, rng)
    humidity = generate_humidity(lat_, rng)
    wind_speed = generate_wind_speed(rng)
    description = await generate_description(temperature, client)

    return {
        "temperature": temperature,
        "feelsLike": round(temperature + (2 if humidity > 70 else -1), 1),
        "humidity": humidity,
        "description": description,
        "icon": icon_for(description),
        "windSpeed": wind_speed,
        "location": name,
        "country": country_for(lat_, lon_),
        "forecast": generate_forecast(lat_, now, rng),
        "mockData": True,
    }
