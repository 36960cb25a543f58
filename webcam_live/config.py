from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Cloudinary credentials; empty = let the SDK read CLOUDINARY_URL
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    media_root_folder: str = "webcam_live"
    max_image_payload_bytes: int = 10 * 1024 * 1024  # 10MB
    capture_timezone: str = "Asia/Kolkata"
    session_secret: str = "change-me"
    admin_username: str = "admin"
    admin_password: str = "password"
    admin_password_hash: str = ""  # bcrypt hash, overrides admin_password
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
