import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Application configuration"""

    # Server settings
    DEBUG = os.getenv("DEBUG", "True").lower() == "true"
    PORT = int(os.getenv("PORT", 5001))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if origin.strip()
    ]

    # Request limits
    MAX_TEXT_LENGTH = int(os.getenv("MAX_TEXT_LENGTH", 100000))  # characters per message

    # Geo-URI settings
    GEO_URI_PREFIX = os.getenv("GEO_URI_PREFIX", "geo:0,0?q=")

    # Drop references whose latitude/longitude fall outside [-90,90]/[-180,180]
    STRICT_RANGES = os.getenv("STRICT_RANGES", "False").lower() == "true"
