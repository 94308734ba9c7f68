from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Shell Plate Layout"
    LOG_LEVEL: str = "INFO"

    # Display
    CURRENCY_SYMBOL: str = "₹"
    DEFAULT_MATERIAL: str = "IS 2062 GR.B"

    # Canvas (logical pixels)
    CANVAS_WIDTH: int = 800
    CANVAS_HEIGHT: int = 600

    # Zoom, in pixels per millimetre
    INITIAL_SCALE: float = 0.05
    MIN_SCALE: float = 0.01
    MAX_SCALE: float = 0.10
    ZOOM_STEP: float = 0.01

    # Gap between stacked plates, in millimetres of content space
    VERTICAL_GAP_MM: float = 600.0

    # Fixed pixel width of the offcut hover region, independent of offcut size
    OFFCUT_HIT_WIDTH_PX: float = 150.0

    class Config:
        env_file = ".env"
        env_prefix = "SHELLPLATE_"


settings = Settings()
