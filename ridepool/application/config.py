"""
Configuración por defecto de ridepool.
Un solo lugar para evitar duplicar valores entre API, servicio y almacenamiento.
"""

import os
from pathlib import Path

# Colecciones del store
RIDES_COLLECTION = "rides"
BOOKINGS_COLLECTION = "bookings"
EMPLOYEES_COLLECTION = "employees"

# Ventanas de tiempo (minutos)
DEFAULT_SEARCH_WINDOW_MIN = 60
DEFAULT_CANDIDATE_WINDOW_MIN = 60

# Plazas por tipo de vehículo (validadas en la capa API)
BIKE_SEATS = 1
MIN_CAR_SEATS = 1
MAX_CAR_SEATS = 7

VEHICLE_TAG_PATTERN = r"^[A-Z]{2}[0-9]{2}[A-Z]{1,2}[0-9]{4}$"

EMPLOYEE_ID_MIN_LEN = 3
EMPLOYEE_ID_MAX_LEN = 20

# Puntos de recogida / destinos frecuentes
COMMON_LOCATIONS = [
    "Office Main Gate",
    "Metro Station - Sector 18",
    "Metro Station - Rajiv Chowk",
    "Metro Station - Connaught Place",
    "Bus Stand - ISBT",
    "Airport Terminal 1",
    "Airport Terminal 3",
    "Cyber City",
    "Golf Course Road",
    "MG Road",
    "Sector 29 Market",
    "DLF Phase 1",
    "DLF Phase 2",
    "DLF Phase 3",
    "Sohna Road",
    "NH-8",
]

DATA_PATH = Path(os.environ.get("RIDEPOOL_DATA_PATH", "data/ridepool.json"))
LOG_LEVEL = os.environ.get("RIDEPOOL_LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("RIDEPOOL_CORS_ORIGINS", "http://localhost:4200").split(",")
    if o.strip()
]
