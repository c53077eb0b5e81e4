from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/vitalis"
    default_tz: str = "UTC"
    vitalis_api_key: str | None = None

    # Dashboard context assembly
    insights_default_limit: int = 3  # Insights returned when the caller gives no limit
    recent_workouts_limit: int = 10  # Newest N workouts fed to the engines
    history_window_days: int = 14  # Workouts / nutrition fetched for the dashboard (incl. today)
    weekly_calories_days: int = 7  # Length of the weekly calorie series

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
