# =============================================================================
# core/formatting.py  —  WeatherSnapshot → Italian text block
# =============================================================================
#
# The layout below is a contract: hosts may show the text verbatim, so the
# line order, the labels and the rounding (one decimal for temperatures and
# wind speed, integers elsewhere) must not drift.
# =============================================================================

from core.models import WeatherSnapshot

UNKNOWN_LOCATION = "Sconosciuto"


def capitalize_first(text: str) -> str:
    """Upper-case the first character only (str.capitalize would lower the rest)."""
    return text[:1].upper() + text[1:]


def format_weather(snapshot: WeatherSnapshot) -> str:
    """Render the eight-line "current weather" block for a snapshot."""
    temperature = snapshot.temperature
    wind = snapshot.wind

    return "\n".join([
        f"Meteo attuale per: **{snapshot.location_name or UNKNOWN_LOCATION}**",
        "---",
        f"🌡️ Temperatura: {temperature.current:.1f}°C (Percepita: {temperature.feels_like:.1f}°C)",
        f"Min/Max: {temperature.minimum:.1f}°C / {temperature.maximum:.1f}°C",
        f"☀️ Condizioni: {capitalize_first(snapshot.conditions.description)}",
        f"💨 Vento: {wind.speed_mps:.1f} m/s ({wind.direction_deg}°)",
        f"💧 Umidità: {snapshot.humidity_pct}%",
        f"Pressione: {snapshot.pressure_hpa} hPa",
    ])
