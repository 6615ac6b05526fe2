from pydantic import BaseModel
import os

class Settings(BaseModel):
    DATA_DIR: str = os.getenv("DATA_DIR", "data")

    # Auth/JWT
    JWT_SECRET: str = os.getenv("JWT_SECRET", "devsecret")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES_SECONDS: int = int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "86400"))

    DEFAULT_SHIPMENT_STATUS: str = os.getenv("DEFAULT_SHIPMENT_STATUS", "Received")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

settings = Settings()
