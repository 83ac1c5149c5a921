from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    debug: bool = False
    log_level: str | None = None  # e.g. "WARNING"; defaults to DEBUG in debug mode, INFO otherwise
    storage_path: str | None = None  # Directory for file-backed storage; None keeps everything in memory
    storage_key_prefix: str = "todo_app_"  # Prefix of the users/tasks/session keys
    notification_duration_ms: int = 3000  # Default toast lifetime, 0 keeps it until dismissed
    seed_demo_data: bool = False
    demo_name: str = "Demo User"
    demo_email: str = "demo@demo.com"
    demo_password: str = "Demo1234"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKNEST_",
        "extra": "ignore",
    }
