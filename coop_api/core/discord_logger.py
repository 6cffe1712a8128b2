import time
import logging
import requests
from .settings import settings

# Diccionario para evitar enviar el mismo tipo de alerta muy seguido
_last_alert_time = {}
FLOOD_INTERVAL = 20  # segundos entre alertas iguales


def send_discord_alert(message: str, level: str = "INFO") -> bool:
    """
    Envía una alerta ligera a Discord con control de flood.
    Devuelve True solo si el webhook aceptó el mensaje.
    """
    if not settings.DISCORD_WEBHOOK_URL:
        return False

    now = time.time()
    last_time = _last_alert_time.get(level, 0)

    # Evita enviar mensajes iguales muy seguido
    if now - last_time < FLOOD_INTERVAL:
        return False

    _last_alert_time[level] = now

    emoji = {
        "INFO": "ℹ️",
        "WARN": "⚠️",
        "ERROR": "🔥",
        "CRITICAL": "💀"
    }.get(level, "⚡")

    payload = {"content": f"{emoji} **[{level}] Coop API:** {message}"}

    try:
        response = requests.post(settings.DISCORD_WEBHOOK_URL, json=payload, timeout=2)
        response.raise_for_status()
        return True
    except requests.RequestException as e:
        # No usamos el logger de la app para no crear un ciclo con log_critical_error
        logging.getLogger("coop_api.discord").warning(f"No se pudo enviar alerta a Discord: {e}")
        return False
