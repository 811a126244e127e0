from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./planner.db"

    # Links embedded in emails point at the API, the confirm redirect at the web app
    API_BASE_URL: str = "http://localhost:3333"
    WEB_BASE_URL: str = "http://localhost:3000"

    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 465
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_SSL: bool = True

    MAIL_FROM_NAME: str = "Plann.er Team"
    MAIL_FROM_ADDRESS: str = "contact@plann.er"

    PROJECT_NAME: str = "Plann.er API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Create, update and confirm trips with invited participants"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
